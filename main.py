import argparse
import logging
import random
import sys

import pygame

from space_duel.world import World
from space_duel.systems import RenderSystem
from space_duel.settings_loader import load_settings
from space_duel.sprites import generate_starfield, load_sprites
import space_duel.config as cfg

logger = logging.getLogger('space_duel.main')

def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Two-player space duel. Player 1: A/S turn, D thrust, F fire. "
                    "Player 2: keypad 4/5 turn, keypad 6 thrust, keypad + fire. Esc quits."
    )
    parser.add_argument(
        '--config',
        default=cfg.SETTINGS_PATH,
        help=f'Settings JSON file (default: {cfg.SETTINGS_PATH})'
    )
    parser.add_argument(
        '--fullscreen',
        action='store_true',
        help='Run in fullscreen mode regardless of the settings file'
    )
    parser.add_argument(
        '--log-level',
        default='INFO',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (default: INFO)'
    )
    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Seed for respawn placement and the starfield'
    )
    return parser.parse_args(argv)

def create_window(settings):
    flags = pygame.FULLSCREEN if settings['fullscreen'] else 0
    size = (settings['width'], settings['height'])
    try:
        screen = pygame.display.set_mode(size, flags, vsync=1 if settings['vsync'] else 0)
    except pygame.error as e:
        # Not every driver can give us vsync
        logger.warning("Could not open window with vsync (%s), retrying without", e)
        screen = pygame.display.set_mode(size, flags)
    pygame.display.set_caption(cfg.WINDOW_CAPTION)
    return screen

def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    settings = load_settings(args.config)
    if args.fullscreen:
        settings['fullscreen'] = True
    logger.info("Window %dx%d fullscreen=%s vsync=%s",
                settings['width'], settings['height'], settings['fullscreen'], settings['vsync'])

    # Initialize pygame
    pygame.init()
    screen = create_window(settings)
    clock = pygame.time.Clock()
    rng = random.Random(args.seed)

    # Create world
    world = World(settings['width'], settings['height'], rng=rng)
    world.add_default_players()

    # Systems run in frame order; rendering comes last and reads the final state
    world.install_default_systems()
    starfield = generate_starfield(settings['width'], settings['height'], cfg.STAR_COUNT, rng)
    font = pygame.font.Font(None, cfg.SCORE_FONT_SIZE)
    world.add_system(RenderSystem(world, screen, load_sprites(), starfield, font))

    # Game loop
    running = True
    while running:
        # Fixed 60Hz target; elapsed wall time in ms is handed to every entity
        elapsed_ms = clock.tick(cfg.TARGET_FPS)

        # Process events
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == cfg.QUIT_KEY:
                    running = False
        if not running:
            break

        # Update world
        world.update(elapsed_ms)

    logger.info("Final score: %d - %d", world.scores[0], world.scores[1])
    pygame.quit()
    return 0

if __name__ == "__main__":
    sys.exit(main())

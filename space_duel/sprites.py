"""
Sprite sheet loading and generated artwork.

Sheets are horizontal strips of equally sized square frames on a black
background. When a sheet cannot be loaded, simple placeholder frames are drawn
instead so the game stays playable without its graphics folder.
"""
import logging

import pygame

from . import config as cfg

logger = logging.getLogger(__name__)

SHIP_COLORS = ((120, 180, 255), (255, 120, 110))
FLAME_COLOR = (255, 190, 80)
BULLET_COLOR = (255, 250, 200)
EXPLOSION_COLOR = (255, 160, 60)


def slice_sheet(sheet, frame_size, count, scale=1.0, stride=None):
    """
    Cuts count frame_size squares out of a horizontal strip and scales each one.
    Frames start stride pixels apart (default frame_size), so sheets with a
    gutter between frames slice cleanly.
    """
    stride = frame_size if stride is None else stride
    sheet.set_colorkey((0, 0, 0))  # Black is transparent
    frames = []
    for i in range(count):
        frame = sheet.subsurface(pygame.Rect(stride * i, 0, frame_size, frame_size))
        if scale != 1.0:
            size = round(frame_size * scale)
            frame = pygame.transform.scale(frame, (size, size))
        frames.append(frame)
    return frames

def load_frames(path, frame_size, count, scale=1.0, placeholder=None, stride=None):
    """
    Loads animation frames from a sprite sheet.

    Args:
        path (str): Image file holding the strip.
        frame_size (int): Width and height of one frame in the file.
        count (int): Number of frames to cut.
        scale (float): Scale applied to every frame.
        placeholder (callable | None): Called with no arguments to build frames
                                       when the file is missing or unusable.
        stride (int | None): Distance between frame origins, frame_size if None.

    Returns:
        list[pygame.Surface]: The frames, possibly empty if nothing could be built.
    """
    try:
        sheet = pygame.image.load(path)
        return slice_sheet(sheet, frame_size, count, scale, stride)
    except (FileNotFoundError, pygame.error, ValueError) as e:
        if placeholder is None:
            logger.warning("Could not load sprite sheet %s: %s", path, e)
            return []
        logger.warning("Could not load sprite sheet %s (%s), using placeholder art", path, e)
        return placeholder()

# --- Placeholder art ---

def ship_placeholder(color, size=128):
    """Four frames: engines off, then low/medium/high thrust."""
    frames = []
    for flame in range(4):
        surface = pygame.Surface((size, size), pygame.SRCALPHA)
        c = size / 2
        # Hull points along +x, which is rotation 0
        hull = [(c + size * 0.3, c), (c - size * 0.2, c - size * 0.18), (c - size * 0.1, c), (c - size * 0.2, c + size * 0.18)]
        if flame:
            length = size * 0.08 * flame
            tail = [(c - size * 0.12, c - size * 0.06), (c - size * 0.12 - length, c), (c - size * 0.12, c + size * 0.06)]
            pygame.draw.polygon(surface, FLAME_COLOR, tail)
        pygame.draw.polygon(surface, color, hull)
        frames.append(surface)
    return frames

def bullet_placeholder(size=14):
    frames = []
    for i in range(4):
        surface = pygame.Surface((size, size), pygame.SRCALPHA)
        radius = size // 2 - (i % 2)
        pygame.draw.circle(surface, BULLET_COLOR, (size // 2, size // 2), max(radius, 1))
        frames.append(surface)
    return frames

def explosion_placeholder(size=176, count=cfg.EXPLOSION_FRAMES):
    frames = []
    for i in range(count):
        surface = pygame.Surface((size, size), pygame.SRCALPHA)
        progress = (i + 1) / count
        radius = max(int(size / 2 * progress), 2)
        width = max(int(6 * (1 - progress)) + 1, 1)
        pygame.draw.circle(surface, EXPLOSION_COLOR, (size // 2, size // 2), radius, width)
        frames.append(surface)
    return frames

# --- Asset sets ---

def load_sprites():
    """Returns sprite name -> frames for every sprite the entities refer to."""
    sprites = {}
    for index, path in enumerate(cfg.SHIP_SHEETS):
        color = SHIP_COLORS[index % len(SHIP_COLORS)]
        sprites[f'ship{index + 1}'] = load_frames(
            path, cfg.SHIP_FRAME_SIZE, cfg.SHIP_FRAME_COUNT, cfg.SHIP_SCALE,
            stride=cfg.SHIP_FRAME_STRIDE,
            placeholder=lambda color=color: ship_placeholder(color, round(cfg.SHIP_FRAME_STRIDE * cfg.SHIP_SCALE)))
    sprites['bullet'] = load_frames(
        cfg.BULLET_SHEET, cfg.BULLET_FRAME_SIZE, cfg.BULLET_FRAME_COUNT, cfg.BULLET_SCALE,
        stride=cfg.BULLET_FRAME_STRIDE,
        placeholder=lambda: bullet_placeholder(cfg.BULLET_BODY_SIZE))
    sprites['explosion'] = load_frames(
        cfg.EXPLOSION_SHEET, cfg.EXPLOSION_FRAME_SIZE, cfg.EXPLOSION_FRAMES, cfg.EXPLOSION_SCALE,
        stride=cfg.EXPLOSION_FRAME_STRIDE,
        placeholder=lambda: explosion_placeholder(round(cfg.EXPLOSION_FRAME_STRIDE * cfg.EXPLOSION_SCALE)))
    return sprites

def generate_starfield(width, height, count, rng):
    """
    Pre-renders the background: count tiny, mostly white stars on black.
    Drawing one surface per frame is far cheaper than drawing every star.
    """
    surface = pygame.Surface((width, height))
    surface.fill(cfg.BACKGROUND_COLOR)
    for _ in range(count):
        star_size = rng.randint(1, 2)
        position = (rng.randint(0, width - 1), rng.randint(0, height - 1))
        color = (rng.randint(200, 255), rng.randint(200, 255), rng.randint(200, 255))
        pygame.draw.rect(surface, color, pygame.Rect(position, (star_size, star_size)))
    return surface

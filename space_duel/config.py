# Game Constants
import pygame

# Window defaults, used when the settings file is missing or malformed
DEFAULT_WINDOW_WIDTH = 1920
DEFAULT_WINDOW_HEIGHT = 1080
SETTINGS_PATH = 'gameconfig.json'

TARGET_FPS = 60
FRAME_TIME_MS = int(1000 / TARGET_FPS)  # One simulation tick at the target rate

WINDOW_CAPTION = "Space Duel"

# Player ship
SHIP_THRUST = 0.05          # Velocity added per tick while engines are on
SHIP_TURN_SPEED = 2.0       # Degrees per tick
SHIP_FIRE_RATE_MS = 350     # Minimum time between shots
SHIP_BODY_SIZE = 60         # Collision square, smaller than the 128px sprite
SHIP_START_MARGIN = 100     # Distance of the starting positions from the side edges

# Projectiles
BULLET_SPEED = 7.0
BULLET_LIFESPAN_MS = 3000
BULLET_INVULNERABLE_MS = 1600  # Keeps the firing ship from shooting itself
BULLET_BODY_SIZE = 14

# Explosion animation
EXPLOSION_FRAMES = 10
EXPLOSION_TICKS_PER_FRAME = 2
EXPLOSION_DURATION_TICKS = 18

RESPAWN_DELAY_MS = 2000

# Draw/update order, lower first
SHIP_ORDER = 0
PROJECTILE_ORDER = 0
EXPLOSION_ORDER = 10

# Background
STAR_COUNT = 200

# Sprite sheets: path, frame stride and size in pixels, frame count, scale
SHIP_SHEETS = ('gfx/ShipFrames1.bmp', 'gfx/ShipFrames2.bmp')
SHIP_FRAME_STRIDE = 64  # Horizontal distance between frames in the sheet
SHIP_FRAME_SIZE = 63
SHIP_FRAME_COUNT = 4
SHIP_SCALE = 2.0
BULLET_SHEET = 'gfx/bullet.bmp'
BULLET_FRAME_STRIDE = 7
BULLET_FRAME_SIZE = 6
BULLET_FRAME_COUNT = 4
BULLET_SCALE = 2.0
EXPLOSION_SHEET = 'gfx/explode.bmp'
EXPLOSION_FRAME_STRIDE = 64
EXPLOSION_FRAME_SIZE = 63
EXPLOSION_SCALE = 2.75

# Key bindings
PLAYER1_KEYS = {
    'turn_left': pygame.K_a,
    'turn_right': pygame.K_s,
    'thrust': pygame.K_d,
    'fire': pygame.K_f,
}
PLAYER2_KEYS = {
    'turn_left': pygame.K_KP4,
    'turn_right': pygame.K_KP5,
    'thrust': pygame.K_KP6,
    'fire': pygame.K_KP_PLUS,
}
QUIT_KEY = pygame.K_ESCAPE

# HUD
SCORE_FONT_SIZE = 36
SCORE_COLOR = (230, 230, 230)
BACKGROUND_COLOR = (0, 0, 0)

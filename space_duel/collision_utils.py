import math

import pygame

# --- Vector Helpers ---
def heading_vector(angle_degrees: float) -> tuple[float, float]:
    """ Unit vector for a rotation in degrees (0 points along +x, y grows downwards). """
    angle_rad = math.radians(angle_degrees)
    return math.cos(angle_rad), math.sin(angle_rad)

def wrap_position(x: float, y: float, width: float, height: float) -> tuple[float, float]:
    """
    Snaps a position that left the play area to the opposite edge.

    Each axis is handled on its own; a coordinate past the far edge goes to 0
    and a negative coordinate goes to the far edge. Positions inside the area
    (edges included) come back unchanged.
    """
    if x > width:
        x = 0
    elif x < 0:
        x = width
    if y > height:
        y = 0
    elif y < 0:
        y = height
    return x, y

# --- Collision Bounds ---
def empty_rect() -> pygame.Rect:
    """ Degenerate bounds; never reported as overlapping anything. """
    return pygame.Rect(0, 0, 0, 0)

def place_centered_square(rect: pygame.Rect, center_x: float, center_y: float, size: int) -> pygame.Rect:
    """
    Moves and resizes rect in place to a size x size square centered on the point.
    Bounds are recomputed every tick, so the same Rect object is reused.
    """
    half = size / 2
    rect.left = int(center_x - half)
    rect.top = int(center_y - half)
    rect.width = size
    rect.height = size
    return rect

def collapse(rect: pygame.Rect) -> pygame.Rect:
    """ Turns rect into degenerate bounds in place. """
    rect.width = 0
    rect.height = 0
    return rect

def rects_intersect(rect1: pygame.Rect, rect2: pygame.Rect) -> bool:
    """ Axis-aligned overlap test. Rects without area never collide. """
    if rect1.width <= 0 or rect1.height <= 0:
        return False
    if rect2.width <= 0 or rect2.height <= 0:
        return False
    return rect1.colliderect(rect2)

"""
Game entities.

Every entity shares one lifecycle: it is created dead, becomes alive when the
World promotes it from the spawn queue, and dies through kill(), which is the
only place death side effects (explosions, scoring, respawn) hang off.
Concrete kinds only supply their own update() and sprite selection.
"""
import logging

import pygame

from . import collision_utils
from . import config as cfg

logger = logging.getLogger(__name__)


class Entity:
    sprite = None
    order = 0

    def __init__(self, position=(0.0, 0.0), rotation=0.0, order=None):
        self.alive = False  # Set by the World on promotion
        self.position = pygame.Vector2(position)
        self.rotation = float(rotation)
        self.collision_rect = collision_utils.empty_rect()
        if order is not None:
            self.order = order
        self.frame = 0
        self.killed_listeners = []

    def on_killed(self, callback):
        """Registers a zero-argument callback run on every alive -> dead transition."""
        self.killed_listeners.append(callback)
        return callback

    def kill(self):
        if not self.alive:
            return
        self.alive = False
        for callback in list(self.killed_listeners):
            callback()

    def update(self, world, elapsed_ms):
        """
        Advances the entity by one tick. Subclasses do their own motion first
        and finish by calling this, which keeps them inside the play area.
        """
        self.handle_wrap_around(world.width, world.height)

    def handle_wrap_around(self, width, height):
        x, y = collision_utils.wrap_position(self.position.x, self.position.y, width, height)
        if (x, y) != (self.position.x, self.position.y):
            self.position.update(x, y)

    def draw(self, renderer):
        renderer.draw(self.sprite, self.frame, self.position, self.rotation)

    def __repr__(self):
        return (f"{type(self).__name__}(pos=({self.position.x:.1f}, {self.position.y:.1f}), "
                f"rot={self.rotation:.1f}, alive={self.alive})")


class Ship(Entity):
    order = cfg.SHIP_ORDER

    # Sprite frames: 0 engines off, 1-3 low/medium/high thrust
    IDLE_FRAME = 0
    THRUST_FRAMES = (1, 2, 3)
    TICKS_PER_THRUST_FRAME = 2

    def __init__(self, sprite='ship1', position=(0.0, 0.0), rotation=0.0,
                 thrust=cfg.SHIP_THRUST, turn_speed=cfg.SHIP_TURN_SPEED,
                 fire_rate_ms=cfg.SHIP_FIRE_RATE_MS, bullet_speed=cfg.BULLET_SPEED,
                 body_size=cfg.SHIP_BODY_SIZE):
        super().__init__(position, rotation)
        self.sprite = sprite
        self.velocity = pygame.Vector2(0, 0)
        self.thrust = thrust
        self.turn_speed = turn_speed
        self.fire_rate_ms = fire_rate_ms
        self.bullet_speed = bullet_speed
        self.body_size = body_size
        self.engines_on = False
        self.last_fire_time = None
        self.thrust_frame_counter = 0

    def turn_left(self):
        self.rotation -= self.turn_speed

    def turn_right(self):
        self.rotation += self.turn_speed

    def can_fire(self, now):
        return self.last_fire_time is None or now - self.last_fire_time >= self.fire_rate_ms

    def fire(self, world):
        """
        Launches a projectile along the ship's heading, carrying the ship's own
        momentum. Does nothing while the fire-rate interval is still running.

        Returns:
            Projectile | None: The queued projectile, or None when throttled.
        """
        now = world.now
        if not self.can_fire(now):
            return None

        hx, hy = collision_utils.heading_vector(self.rotation)
        velocity = pygame.Vector2(hx, hy) * self.bullet_speed + self.velocity
        projectile = Projectile(self.position, self.rotation, velocity, created_at=now)
        world.spawn(projectile)
        self.last_fire_time = now
        logger.debug("%s fired at t=%d", self.sprite, now)
        return projectile

    def reset(self, position, rotation):
        """Puts a destroyed ship back into its starting state at a new location."""
        self.position.update(position)
        self.rotation = float(rotation)
        self.velocity.update(0, 0)
        self.engines_on = False
        self.thrust_frame_counter = 0
        self.frame = self.IDLE_FRAME

    def update(self, world, elapsed_ms):
        if self.engines_on:
            hx, hy = collision_utils.heading_vector(self.rotation)
            self.velocity.x += self.thrust * hx
            self.velocity.y += self.thrust * hy

            cycle = self.TICKS_PER_THRUST_FRAME * len(self.THRUST_FRAMES)
            if self.thrust_frame_counter >= cycle:
                self.thrust_frame_counter = 0
            self.frame = self.THRUST_FRAMES[self.thrust_frame_counter // self.TICKS_PER_THRUST_FRAME]
            self.thrust_frame_counter += 1
        else:
            self.frame = self.IDLE_FRAME
            self.thrust_frame_counter = 0

        self.position += self.velocity

        collision_utils.place_centered_square(
            self.collision_rect, self.position.x, self.position.y, self.body_size)

        super().update(world, elapsed_ms)


class Projectile(Entity):
    sprite = 'bullet'
    order = cfg.PROJECTILE_ORDER

    FRAME_COUNT = 4
    TICKS_PER_FRAME = 5

    def __init__(self, position, rotation, velocity, created_at,
                 lifespan_ms=cfg.BULLET_LIFESPAN_MS,
                 invulnerable_ms=cfg.BULLET_INVULNERABLE_MS,
                 body_size=cfg.BULLET_BODY_SIZE):
        super().__init__(position, rotation)
        # Fixed at launch
        self.velocity = pygame.Vector2(velocity)
        self.created_at = created_at
        self.lifespan_ms = lifespan_ms
        self.invulnerable_ms = invulnerable_ms
        self.body_size = body_size
        self.frame_counter = 0

    def age(self, now):
        return now - self.created_at

    def is_collidable(self, now):
        return self.age(now) > self.invulnerable_ms

    def update(self, world, elapsed_ms):
        now = world.now
        age = self.age(now)
        if age > self.lifespan_ms:
            self.kill()
            return

        self.position += self.velocity

        self.frame = self.frame_counter // self.TICKS_PER_FRAME
        self.frame_counter += 1
        if self.frame_counter >= self.FRAME_COUNT * self.TICKS_PER_FRAME:
            self.frame_counter = 0

        if self.is_collidable(now):
            collision_utils.place_centered_square(
                self.collision_rect, self.position.x, self.position.y, self.body_size)
        else:
            collision_utils.collapse(self.collision_rect)

        super().update(world, elapsed_ms)


class Explosion(Entity):
    """Purely visual; has no collision bounds and removes itself when the animation ends."""
    sprite = 'explosion'
    order = cfg.EXPLOSION_ORDER

    def __init__(self, position, rotation=0.0,
                 frames=cfg.EXPLOSION_FRAMES,
                 ticks_per_frame=cfg.EXPLOSION_TICKS_PER_FRAME,
                 duration_ticks=cfg.EXPLOSION_DURATION_TICKS):
        super().__init__(position, rotation)
        self.frames = frames
        self.ticks_per_frame = ticks_per_frame
        self.duration_ticks = duration_ticks
        self.frame_counter = 0

    def update(self, world, elapsed_ms):
        if self.alive:
            self.frame = min(self.frame_counter // self.ticks_per_frame, self.frames - 1)
            self.frame_counter += 1
            if self.frame_counter > self.duration_ticks:
                self.kill()

        super().update(world, elapsed_ms)

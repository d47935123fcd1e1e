import logging

import pygame

from . import collision_utils
from . import config as cfg

logger = logging.getLogger(__name__)


class SpawnSystem:
    """Promotes spawn requests whose activation time has come into the live collection."""
    def __init__(self, world):
        self.world = world

    def process(self, dt=0):
        now = self.world.now
        ready = []
        pending = []
        for request in self.world.spawn_queue:
            (ready if request.is_ready(now) else pending).append(request)
        if not ready:
            return

        self.world.spawn_queue = pending
        for request in ready:
            entity = request.entity
            if entity.alive:
                continue  # Already live, nothing to promote
            entity.alive = True
            # Killed and re-spawned before the cull ran: revive the existing entry
            if any(live is entity for live in self.world.entities):
                continue
            self.world.entities.append(entity)
            logger.debug("Promoted %r at t=%d", entity, now)

        # Only re-sort when membership changed; list.sort is stable so equal orders keep insertion order
        self.world.entities.sort(key=lambda entity: entity.order)

class InputSystem:
    def __init__(self, world, get_pressed=None):
        self.world = world
        self.get_pressed = get_pressed or pygame.key.get_pressed

    def process(self, dt=0):
        keys = self.get_pressed()
        for ship in self.world.players:
            # Ships waiting to respawn take no input
            if not ship.alive:
                continue
            controls = self.world.controls_for(ship)
            if controls is None:
                continue

            if keys[controls.turn_left]:
                ship.turn_left()
            if keys[controls.turn_right]:
                ship.turn_right()
            if keys[controls.fire]:
                ship.fire(self.world)
            ship.engines_on = bool(keys[controls.thrust])

class UpdateSystem:
    def __init__(self, world):
        self.world = world

    def process(self, dt):
        for entity in self.world.entities:
            # Killed since the last cull, e.g. by a kill() outside the collision pass
            if not entity.alive:
                continue
            entity.update(self.world, dt)

class CollisionSystem:
    """
    All-pairs overlap test over the live collection.

    Participants are the entities alive when the pass starts, so an entity
    killed by an earlier pair still kills everything else it overlaps. The
    result does not depend on iteration order. O(n^2) is fine for a few dozen
    entities.
    """
    def __init__(self, world):
        self.world = world
        self.collision_pairs = []  # Pairs that collided this frame

    def process(self, dt=0):
        self.collision_pairs.clear()
        participants = [entity for entity in self.world.entities if entity.alive]

        for i in range(len(participants)):
            entity1 = participants[i]
            for j in range(i + 1, len(participants)):
                entity2 = participants[j]
                if collision_utils.rects_intersect(entity1.collision_rect, entity2.collision_rect):
                    self.collision_pairs.append((entity1, entity2))

        for entity1, entity2 in self.collision_pairs:
            logger.debug("Collision: %r <-> %r", entity1, entity2)
            entity1.kill()
            entity2.kill()

class CleanupSystem:
    """Removes dead entities; the only place the live collection shrinks."""
    def __init__(self, world):
        self.world = world

    def process(self, dt=0):
        before = len(self.world.entities)
        self.world.entities[:] = [entity for entity in self.world.entities if entity.alive]
        removed = before - len(self.world.entities)
        if removed:
            logger.debug("Culled %d dead entities", removed)

class RenderSystem:
    def __init__(self, world, screen, sprites, starfield=None, font=None):
        self.world = world
        self.screen = screen
        self.sprites = sprites  # sprite name -> list of frame surfaces
        self.starfield = starfield
        self.font = font

    def _draw_centered(self, surface, center_pos):
        """Helper to draw a surface centered at a given position."""
        rect = surface.get_rect(center=center_pos)
        self.screen.blit(surface, rect.topleft)

    def draw(self, sprite, frame, position, rotation):
        frames = self.sprites.get(sprite)
        if not frames:
            return
        surface = frames[frame % len(frames)]
        # Game angles grow clockwise on screen, pygame rotates counter-clockwise
        angle = rotation % 360
        if angle:
            surface = pygame.transform.rotate(surface, -angle)
        self._draw_centered(surface, (position.x, position.y))

    def draw_scores(self):
        if self.font is None:
            return
        points = self.world.scores.points
        left = self.font.render(str(points[0]), True, cfg.SCORE_COLOR)
        self.screen.blit(left, (20, 10))
        right = self.font.render(str(points[1]), True, cfg.SCORE_COLOR)
        self.screen.blit(right, (self.screen.get_width() - right.get_width() - 20, 10))

    def process(self, dt=0):
        # The starfield also clears the previous frame
        if self.starfield is not None:
            self.screen.blit(self.starfield, (0, 0))
        else:
            self.screen.fill(cfg.BACKGROUND_COLOR)

        for entity in self.world.entities:
            entity.draw(self)
        self.draw_scores()

        pygame.display.flip()

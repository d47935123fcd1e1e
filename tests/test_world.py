"""
Tests for the World frame pipeline: promotion, input, simulation,
collision, culling, and the ship kill reaction.
"""
import pygame
import pytest

from space_duel import config as cfg
from space_duel.components import Controls
from space_duel.entities import Explosion, Projectile, Ship
from space_duel.systems import CollisionSystem


def armed_projectile(world, position):
    """A stationary projectile already past its invulnerability window."""
    return Projectile(position, 0, (0, 0), created_at=world.now - cfg.BULLET_INVULNERABLE_MS - 100)


def add_two_players(world):
    ship1 = Ship('ship1', (100, 300), rotation=0)
    ship2 = Ship('ship2', (700, 300), rotation=180)
    world.add_player(ship1, Controls.from_dict(cfg.PLAYER1_KEYS))
    world.add_player(ship2, Controls.from_dict(cfg.PLAYER2_KEYS))
    return ship1, ship2


# ============================================================================
# Promotion
# ============================================================================


class TestSpawnIsolation:
    """Queued entities stay out of the simulation until their time comes."""

    def test_not_live_before_activation(self, world, step):
        ship = Ship(position=(100, 100))
        ship.velocity.update(5, 0)
        world.spawn(ship, delay_ms=100)

        step(world, frames=6)  # t = 96

        assert ship not in world.entities
        assert ship.alive is False
        assert tuple(ship.position) == (100, 100)

    def test_promoted_and_updated_once_due(self, world, step):
        ship = Ship(position=(100, 100))
        ship.velocity.update(5, 0)
        world.spawn(ship, delay_ms=100)

        step(world, frames=7)  # t = 112

        assert ship in world.entities
        assert ship.alive is True
        assert ship.position.x == 105
        assert world.spawn_queue == []

    def test_activation_in_the_past_promotes_next_frame(self, world, step, clock):
        clock.advance(1000)
        ship = Ship(position=(100, 100))
        world.spawn(ship, delay_ms=-500)
        step(world)
        assert ship in world.entities

    def test_nothing_promoted_without_update(self, world):
        world.spawn(Ship())
        assert world.entities == []

    def test_promotion_sorts_by_order_stably(self, world, step):
        explosion = Explosion((10, 10))
        ship = Ship(position=(100, 100))
        projectile = Projectile((300, 300), 0, (0, 0), created_at=0)
        world.spawn(explosion)
        world.spawn(ship)
        world.spawn(projectile)

        step(world)

        assert world.entities == [ship, projectile, explosion]

    def test_respawn_before_cull_keeps_single_entry(self, world, step):
        """Killing and re-spawning between frames revives the entity in place."""
        explosion = Explosion((10, 10))
        world.spawn(explosion)
        step(world)

        explosion.kill()
        world.spawn(explosion)
        step(world)

        assert world.entities.count(explosion) == 1
        assert explosion.alive is True

        step(world, frames=3)
        assert world.entities.count(explosion) == 1

    def test_revived_entity_is_updated_once_per_frame(self, world, step):
        ship = Ship(position=(100, 100))
        ship.velocity.update(5, 0)
        world.spawn(ship)
        step(world)

        ship.kill()
        world.spawn(ship)
        step(world)

        assert ship.position.x == 110

    def test_pending_requests_stay_queued(self, world, step):
        early = Ship(position=(100, 100))
        late = Ship(position=(500, 100))
        world.spawn(early)
        world.spawn(late, delay_ms=1000)
        step(world)
        assert world.entities == [early]
        assert [request.entity for request in world.spawn_queue] == [late]


# ============================================================================
# Input
# ============================================================================


class TestInput:
    def test_keys_drive_player_one(self, world, keys, step):
        ship1, ship2 = add_two_players(world)
        step(world)

        keys.pressed = {pygame.K_s, pygame.K_d}
        step(world)

        assert ship1.rotation == pytest.approx(cfg.SHIP_TURN_SPEED)
        assert ship1.engines_on is True
        assert ship2.rotation == 180
        assert ship2.engines_on is False

    def test_fire_key_queues_projectile(self, world, keys, step):
        ship1, _ = add_two_players(world)
        step(world)

        keys.pressed = {pygame.K_KP_PLUS}
        step(world)

        projectiles = [request.entity for request in world.spawn_queue]
        assert len(projectiles) == 1
        assert isinstance(projectiles[0], Projectile)
        assert projectiles[0].position.x == 700

    def test_releasing_thrust_stops_engines(self, world, keys, step):
        ship1, _ = add_two_players(world)
        keys.pressed = {pygame.K_d}
        step(world)
        keys.pressed = set()
        step(world)
        assert ship1.engines_on is False

    def test_ships_not_alive_take_no_input(self, world, keys, step):
        ship1, _ = add_two_players(world)
        keys.pressed = {pygame.K_a, pygame.K_f}
        # Ships are queued but not promoted until the first frame runs
        world.systems[1].process(0)
        assert ship1.rotation == 0
        assert not any(isinstance(r.entity, Projectile) for r in world.spawn_queue)


# ============================================================================
# Collision
# ============================================================================


class TestCollision:
    def test_overlapping_entities_both_die(self, world, step):
        a = Ship(position=(400, 300))
        b = Ship(position=(420, 300))
        world.spawn(a)
        world.spawn(b)

        step(world)

        assert a.alive is False
        assert b.alive is False
        assert world.entities == []

    def test_separate_entities_survive(self, world, step):
        a = Ship(position=(100, 300))
        b = Ship(position=(500, 300))
        world.spawn(a)
        world.spawn(b)
        step(world)
        assert world.entities == [a, b]

    @pytest.mark.parametrize("reverse", [False, True])
    def test_result_independent_of_iteration_order(self, world, step, reverse):
        """A overlaps B and C, B and C are apart: all three die either way."""
        a = Ship(position=(400, 300))
        b = Ship(position=(350, 300))
        c = Ship(position=(450, 300))
        for entity in ([c, b, a] if reverse else [a, b, c]):
            world.spawn(entity)

        step(world)

        assert not (a.alive or b.alive or c.alive)

    def test_each_victim_notified_once(self, world, step):
        a = Ship(position=(400, 300))
        b = Ship(position=(350, 300))
        c = Ship(position=(450, 300))
        calls = []
        a.on_killed(lambda: calls.append('a'))
        for entity in (a, b, c):
            world.spawn(entity)

        step(world)

        assert calls == ['a']

    def test_collision_pairs_recorded(self, world, step):
        a = Ship(position=(400, 300))
        b = Ship(position=(420, 300))
        world.spawn(a)
        world.spawn(b)
        step(world)
        collision = next(s for s in world.systems if isinstance(s, CollisionSystem))
        assert collision.collision_pairs == [(a, b)]

    def test_invulnerable_projectile_passes_through(self, world, step):
        ship = Ship(position=(400, 300))
        projectile = Projectile((400, 300), 0, (0, 0), created_at=0)
        world.spawn(ship)
        world.spawn(projectile)

        step(world, frames=100)  # t = 1600, age not yet past the window
        assert ship.alive and projectile.alive

        step(world)  # t = 1616
        assert not ship.alive
        assert not projectile.alive
        assert world.entities == []

    def test_expired_projectile_does_not_collide(self, world, step, clock):
        clock.advance(5000)
        ship = Ship(position=(400, 300))
        old = Projectile((400, 300), 0, (0, 0), created_at=0)
        world.spawn(ship)
        world.spawn(old)
        step(world)
        assert ship.alive
        assert old not in world.entities

    def test_explosions_never_collide(self, world, step):
        ship = Ship(position=(400, 300))
        world.spawn(ship)
        world.spawn(Explosion((400, 300)))
        step(world)
        assert ship.alive


# ============================================================================
# Kill reaction: explosion, scoring, respawn
# ============================================================================


class TestShipDestroyed:
    def test_explosion_score_and_respawn(self, make_world, clock, step):
        world = make_world(123, 45, 90)
        ship1, ship2 = add_two_players(world)
        step(world)  # t = 16, ships live

        world.spawn(armed_projectile(world, (100, 300)))
        step(world)  # t = 32, projectile promoted and hits ship1
        kill_time = clock.now()

        assert ship1.alive is False
        assert ship1 not in world.entities
        assert world.scores.points == [0, 1]

        step(world)
        explosions = [e for e in world.entities if isinstance(e, Explosion)]
        assert len(explosions) == 1
        assert tuple(explosions[0].position) == (100, 300)
        assert world.entities[-1] is explosions[0]

        # Still waiting just before the respawn delay runs out
        while clock.now() + 16 < kill_time + cfg.RESPAWN_DELAY_MS:
            step(world)
        assert ship1 not in world.entities

        step(world)
        assert clock.now() >= kill_time + cfg.RESPAWN_DELAY_MS
        assert ship1 in world.entities
        assert ship1.alive is True
        assert tuple(ship1.position) == (123, 45)
        assert ship1.rotation == 90
        assert tuple(ship1.velocity) == (0, 0)

    def test_respawned_ship_takes_input_again(self, make_world, keys, step):
        world = make_world(200, 100, 0)
        ship1, _ = add_two_players(world)
        step(world)
        world.spawn(armed_projectile(world, tuple(ship1.position)))
        step(world)

        keys.pressed = {pygame.K_a}
        step(world, frames=10)
        assert ship1.alive is False

        step(world, frames=130)
        assert ship1.alive is True
        before = ship1.rotation
        step(world)
        assert ship1.rotation == pytest.approx(before - cfg.SHIP_TURN_SPEED)

    def test_score_invariant(self, make_world, step):
        world = make_world(200, 100, 0, 600, 500, 0, 400, 100, 0)
        ship1, ship2 = add_two_players(world)
        step(world)

        victims = [ship2, ship1, ship2]
        for victim in victims:
            # Wait for the victim to be back on the field
            while not victim.alive:
                step(world)
            world.spawn(armed_projectile(world, tuple(victim.position)))
            step(world)
            assert victim.alive is False

        assert world.scores.points == [2, 1]
        assert world.scores.total == len(victims)
        assert world.scores.kills == len(victims)

    def test_kill_outside_collision_pass_also_scores(self, world, step):
        ship1, ship2 = add_two_players(world)
        step(world)
        ship2.kill()
        ship2.kill()
        assert world.scores.points == [1, 0]
        step(world)
        assert ship2 not in world.entities


class TestPlayers:
    def test_third_player_rejected(self, world):
        add_two_players(world)
        with pytest.raises(ValueError):
            world.add_player(Ship(), Controls(1, 2, 3, 4))

    def test_opponent_of(self, world):
        ship1, ship2 = add_two_players(world)
        assert world.opponent_of(ship1) == 1
        assert world.opponent_of(ship2) == 0

    def test_unknown_ship_has_no_opponent(self, world):
        add_two_players(world)
        with pytest.raises(KeyError):
            world.opponent_of(Ship())

    def test_default_players_face_each_other(self, world, step):
        ship1, ship2 = world.add_default_players()
        step(world)
        assert tuple(ship1.position) == (cfg.SHIP_START_MARGIN, 300)
        assert tuple(ship2.position) == (800 - cfg.SHIP_START_MARGIN, 300)
        assert ship1.rotation == 0
        assert ship2.rotation == 180
        assert world.entities == [ship1, ship2]


# ============================================================================
# Scenario
# ============================================================================


class TestProjectileFlight:
    def test_bullet_travel_over_100ms(self, world, step):
        """A shot along 0 degrees at speed 7 moves 7px per 16ms tick and stays inert."""
        ship = Ship(position=(100, 300), rotation=0, bullet_speed=7)
        projectile = ship.fire(world)

        step(world, frames=6)  # 96ms, about 100/16 ticks

        assert projectile.position.x == pytest.approx(100 + 7 * 6)
        assert projectile.position.y == pytest.approx(300)
        assert projectile.collision_rect.width == 0
        assert not projectile.is_collidable(world.now)

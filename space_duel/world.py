import logging
import random
import time

from . import config as cfg
from .components import Controls, Scoreboard, SpawnRequest
from .entities import Explosion, Ship
from .systems import CleanupSystem, CollisionSystem, InputSystem, SpawnSystem, UpdateSystem

logger = logging.getLogger(__name__)


class GameClock:
    """Monotonic game time in whole milliseconds since construction."""
    def __init__(self):
        self._start = time.perf_counter()

    def now(self):
        return int((time.perf_counter() - self._start) * 1000)


class World:
    MAX_PLAYERS = 2

    def __init__(self, width, height, clock=None, rng=None):
        # Play area, resolved once at startup
        self.width = width
        self.height = height
        self.clock = clock or GameClock()
        self.rng = rng or random.Random()

        self.entities = []      # Live collection, kept sorted by draw order
        self.spawn_queue = []   # Pending SpawnRequests
        self.systems = []
        self.players = []
        self.controls = {}      # id(ship) -> Controls
        self.scores = Scoreboard(self.MAX_PLAYERS)

    @property
    def now(self):
        return self.clock.now()

    def spawn(self, entity, delay_ms=0):
        """
        Queues an entity for the live collection. It stays invisible to every
        system until a promotion pass runs at or after now + delay_ms.
        """
        request = SpawnRequest(entity, self.now + delay_ms)
        self.spawn_queue.append(request)
        logger.debug("Queued %r for t=%d", entity, request.activate_at)
        return request

    def add_system(self, system):
        self.systems.append(system)

    def install_default_systems(self, get_pressed=None):
        """Adds the simulation pipeline in frame order: promote, input, simulate, collide, cull."""
        self.add_system(SpawnSystem(self))
        self.add_system(InputSystem(self, get_pressed))
        self.add_system(UpdateSystem(self))
        self.add_system(CollisionSystem(self))
        self.add_system(CleanupSystem(self))

    def update(self, elapsed_ms):
        for system in self.systems:
            system.process(elapsed_ms)

    # --- Players ---

    def add_player(self, ship, controls):
        if len(self.players) >= self.MAX_PLAYERS:
            raise ValueError(f"World supports at most {self.MAX_PLAYERS} players")
        self.players.append(ship)
        self.controls[id(ship)] = controls
        # Ships are recycled rather than rebuilt, so this listener lives as long as the ship
        ship.on_killed(lambda: self._on_ship_killed(ship))
        self.spawn(ship)
        logger.info("Registered player %d: %r", len(self.players), ship)
        return ship

    def add_default_players(self):
        """Creates both ships facing each other across the middle of the field."""
        mid_y = self.height / 2
        ship1 = Ship('ship1', (cfg.SHIP_START_MARGIN, mid_y), rotation=0)
        ship2 = Ship('ship2', (self.width - cfg.SHIP_START_MARGIN, mid_y), rotation=180)
        self.add_player(ship1, Controls.from_dict(cfg.PLAYER1_KEYS))
        self.add_player(ship2, Controls.from_dict(cfg.PLAYER2_KEYS))
        return ship1, ship2

    def controls_for(self, ship):
        return self.controls.get(id(ship))

    def player_index(self, ship):
        for index, player in enumerate(self.players):
            if player is ship:
                return index
        raise KeyError(f"{ship!r} is not a registered player")

    def opponent_of(self, ship):
        """Index of the player who scores when this ship is destroyed."""
        return (self.player_index(ship) + 1) % self.MAX_PLAYERS

    def random_position(self):
        return self.rng.randint(0, self.width), self.rng.randint(0, self.height)

    def _on_ship_killed(self, ship):
        self.spawn(Explosion(ship.position, ship.rotation))

        opponent = self.opponent_of(ship)
        self.scores.award(opponent)
        logger.info("Player %d ship destroyed! Score: %s",
                    self.player_index(ship) + 1, " - ".join(str(p) for p in self.scores.points))

        ship.reset(self.random_position(), self.rng.randint(0, 359))
        self.spawn(ship, cfg.RESPAWN_DELAY_MS)

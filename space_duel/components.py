class SpawnRequest:
    def __init__(self, entity, activate_at):
        """ Initializes a pending spawn.

        Args:
            entity (Entity): The entity to bring into the live collection.
            activate_at (int): Earliest game time (ms) at which it may be promoted.
        """
        self.entity = entity
        self.activate_at = activate_at

    def is_ready(self, now):
        return self.activate_at <= now

    def __repr__(self):
        return f"SpawnRequest({self.entity!r}, activate_at={self.activate_at})"

class Controls:
    """Key bindings for one player."""
    def __init__(self, turn_left, turn_right, thrust, fire):
        self.turn_left = turn_left
        self.turn_right = turn_right
        self.thrust = thrust
        self.fire = fire

    @classmethod
    def from_dict(cls, bindings):
        return cls(bindings['turn_left'], bindings['turn_right'], bindings['thrust'], bindings['fire'])

class Scoreboard:
    def __init__(self, players=2):
        self.points = [0] * players
        self.kills = 0  # Ship kill events seen so far

    def award(self, player_index):
        self.points[player_index] += 1
        self.kills += 1

    def __getitem__(self, player_index):
        return self.points[player_index]

    @property
    def total(self):
        return sum(self.points)

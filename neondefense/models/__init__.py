from neondefense.models.city import City
from neondefense.models.defense import LaunchBase, pick_launch_base
from neondefense.models.explosion import Explosion, ExplosionKind
from neondefense.models.missile import EnemyMissile, PlayerMissile, Target, TargetKind
from neondefense.models.registry import EntityRegistry

__all__ = [
    "City",
    "LaunchBase", "pick_launch_base",
    "Explosion", "ExplosionKind",
    "EnemyMissile", "PlayerMissile", "Target", "TargetKind",
    "EntityRegistry",
]

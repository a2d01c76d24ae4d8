# settings.py

# Board
GRID_SIZE = 10

# Tile codes (terrain tags stored in the grid)
TILE_FLOOR = 0
TILE_WALL = 1
TILE_GRASS = 2
TILE_EXIT = 3
TILE_ROCK = 4
TILE_HOUSE = 5
TILE_WATER = 6
TILE_FOOD = 7
TILE_AXE = 9
TILE_HAMMER = 10
TILE_NOTE = 11
TILE_BISHOP_SPEAR = 12
TILE_BOMB = 24
TILE_SIGN = 26
TILE_HEART = 27
TILE_HORSE_ICON = 28
TILE_PORT = 29
TILE_PITFALL = 49

# Tiles an enemy may step onto
ENEMY_WALKABLE_TILES = frozenset({
    TILE_FLOOR,
    TILE_WATER,
    TILE_FOOD,
    TILE_AXE,
    TILE_HAMMER,
    TILE_BISHOP_SPEAR,
    TILE_HORSE_ICON,
    TILE_BOMB,
    TILE_NOTE,
    TILE_HEART,
    TILE_PORT,
    TILE_PITFALL,
})

# The player can also use exits and cross grass
PLAYER_WALKABLE_TILES = ENEMY_WALKABLE_TILES | {TILE_EXIT, TILE_GRASS}

# Animation timings (frames)
ATTACK_ANIMATION_FRAMES = 15
SMOKE_ANIMATION_FRAMES = 18
LIFT_FRAMES = 15
HORSE_CHARGE_FRAMES = 20
BUMP_OFFSET_PIXELS = 16.0
BUMP_DECAY = 0.8

# Enemy AI tuning
AI_LEADER_GROUP_SIZE = 3            # roster size at which followers track the leader
AI_THREAT_RANGE = 2                 # Manhattan distance considered "vulnerable"
AI_CLUSTERING_GAIN_THRESHOLD = 0.3  # minimum ally-distance gain for a tactical redirect
AI_MAX_EXTRA_PLAYER_DISTANCE = 2    # how much farther from the player a redirect may go
AI_ISOLATED_ALLY_DISTANCE = 100     # ally distance reported when no allies are around

# Enemy defaults
ENEMY_DEFAULT_ATTACK = 1
ENEMY_DEFAULT_HEALTH = 1
PLAYER_MAX_HEALTH = 3

# --- Display ---
WIDTH = 800                 # viewport width (host caps the window at this)
HEIGHT = 450
FPS = 60
PLATFORM_OFFSET = 60        # platform line = height - offset

# --- Ball / Physics (per-tick units) ---
BALL_RADIUS = 15
BALL_X_FRACTION = 0.25      # ball's fixed x as a fraction of the width
GRAVITY = 0.6               # px/tick^2, downward
JUMP_FORCE = 12.5           # jump sets vy = -JUMP_FORCE
CEILING_BOUNCE = -0.3       # vy multiplier when the ball hits the top

# --- Scroll / Difficulty ---
BASE_SPEED = 4.5            # initial scroll speed (px/tick)
SPEED_INCREMENT = 0.001     # added to speed every playing tick
PASSIVE_SCORE_RATE = 0.01   # score += speed * rate every playing tick

# --- Gap generation ---
BASE_SPACING = 220          # min spacing between leading edges at BASE_SPEED
MIN_SPACING_FLOOR = 90      # min spacing never drops below this (>= GAP_MAX_W)
MAX_SPACING_FACTOR = 1.8    # max spacing = min spacing * factor
MIN_SPAWN_STEP = 80         # new gap never closer than this to the spawn cursor
GAP_MIN_W = 40
GAP_MAX_W = 90
SEED_CURSOR_MIN = 100       # initial cursor = width + U(min, max)
SEED_CURSOR_MAX = 200
SEED_FRONTIER_WIDTHS = 2.5  # pre-spawn until the cursor passes width * this
OFFSCREEN_MARGIN = 50       # drop objects whose trailing edge is left of -margin
FATAL_TOLERANCE = 20        # fall-through band below the platform line

# --- Scoring ---
GAP_BONUS = 5
COIN_BONUS = 25

# --- Coins ---
COIN_CHANCE = 0.35
COIN_RADIUS = 10
COIN_LIFT_MIN = 25          # extra height above a jump-ready ball
COIN_LIFT_MAX = 60
COIN_BOB_AMPLITUDE = 3.0
COIN_BOB_SPEED_MIN = 0.05   # radians per tick
COIN_BOB_SPEED_MAX = 0.10

# --- Cosmetics ---
SHAKE_MAGNITUDE = 5
SHAKE_DURATION = 15
JUMP_PARTICLES = 8
LAND_PARTICLES = 5
COIN_PARTICLES = 15

# --- Run ---
DEFAULT_NICKNAME = "Player"
SEED_DEFAULT = 12345

# --- Colors (RGB / RGBA) ---
COLOR_SKY = (135, 206, 250)
COLOR_GROUND = (80, 160, 80)
COLOR_GRASS = (120, 200, 120)
COLOR_GAP = (40, 40, 40)
COLOR_BALL = (255, 0, 0)
COLOR_COIN = (255, 215, 0)
COLOR_COIN_SHINE = (255, 255, 150)
COLOR_FG = (255, 255, 255)
COLOR_DUST = (255, 255, 255)
COLOR_OVERLAY = (0, 0, 0, 150)
COLOR_PAUSE_OVERLAY = (0, 0, 0, 100)
COLOR_GAME_OVER = (200, 0, 0, 180)
COLOR_BUTTON = (50, 180, 50)

# src/config/settings.py

from datetime import date

from src.config.env import APP_ENV, ENV_DEV

# --- Model anchors ---

# Electricity price and CPI drift are compounded from this date.
MODEL_BASE_DATE = date(2025, 10, 1)

# World electricity consumption projection
WORLD_ELEC_BASE_TWH = 30_000.0
WORLD_ELEC_BASE_YEAR = 2024
WORLD_ELEC_GROWTH = 0.025  # 2.5%/yr, applied both backward and forward

# Calendar year used for fractional-year maths
DAYS_PER_YEAR = 365.2425
HOURS_PER_YEAR = DAYS_PER_YEAR * 24
TARGET_BLOCK_INTERVAL_S = 600
MINUTES_PER_BLOCK = TARGET_BLOCK_INTERVAL_S / 60
BLOCKS_PER_YEAR = (DAYS_PER_YEAR * 24 * 3600) / TARGET_BLOCK_INTERVAL_S

# --- Halving schedule ---

GENESIS_SUBSIDY_BTC = 50.0
# Stored as tuples to keep settings free of logic
KNOWN_HALVING_ERAS = (
    ((2009, 1, 3), 50.0),
    ((2012, 11, 28), 25.0),
    ((2016, 7, 9), 12.5),
    ((2020, 5, 11), 6.25),
    ((2024, 4, 20), 3.125),
)
# Calendar approximation of the 210,000-block halving interval
HALVING_INTERVAL_YEARS = 4
# 40 eras * 4 years = 160 years past the 2024 halving
FUTURE_ERA_COUNT = 40
BLOCKS_PER_HALVING = 210_000
SATS_PER_BTC = 100_000_000

# --- Adoption curve ---

ADOPTION_STEEPNESS = 0.55
ADOPTION_FLOOR = 1e-6
# Anchor share when no usable history is available
DEFAULT_ANCHOR_SHARE = 0.001
# Anchor ratio used when the cap share is zero or negative
DEFAULT_ANCHOR_RATIO = 0.01

# --- Scenario presets (cap utilisation, electricity price, markup) ---

SCENARIO_BEARISH_CAP_UTIL = 0.7
SCENARIO_BEARISH_ELEC_PRICE_MULT = 0.844
SCENARIO_BEARISH_MARKUP = 1.2

SCENARIO_BASE_CAP_UTIL = 1.0
SCENARIO_BASE_ELEC_PRICE_MULT = 1.0
SCENARIO_BASE_MARKUP = 1.5

SCENARIO_BULLISH_CAP_UTIL = 1.0
SCENARIO_BULLISH_ELEC_PRICE_MULT = 1.169
SCENARIO_BULLISH_MARKUP = 2.0

DEFAULT_SCENARIO = "Base"

# --- Model input defaults (expressed as %) ---

DEFAULT_TARGET_DATE = date(2050, 10, 13)
DEFAULT_CAP_SHARE_PCT = 1.5
DEFAULT_FEES_PCT = 15.0
DEFAULT_ELEC_BASE_USD_PER_KWH = 0.06
DEFAULT_ELEC_DRIFT_PCT = 1.0
DEFAULT_CPI_PCT = 2.5
DEFAULT_OVERHEAD_PHI = 1.15
DEFAULT_STACK_BTC = 0.01

# Chart horizon: genesis year -> base year + N
SERIES_START_YEAR = 2009
SERIES_HORIZON_YEARS = 25

# UI date bounds
TARGET_YEAR_MIN = 2009
TARGET_YEAR_MAX = 2175

# --- Historical network efficiency (J/TH), upper year bound -> value ---
# 2009-2011 CPU, 2012-2013 GPU/FPGA, 2014-2016 early ASICs, 2017-2018 S5-S9,
# 2019-2020 S17/S19, 2021-2022 S19 Pro, 2023-2024 S19 XP / S21 fleet average.
EFFICIENCY_J_PER_TH_BY_YEAR = (
    (2011, 5_000_000.0),
    (2013, 50_000.0),
    (2016, 120.0),
    (2018, 85.0),
    (2020, 38.0),
    (2022, 25.0),
    (2024, 18.0),
)
EFFICIENCY_J_PER_TH_FUTURE = 16.0

# --- Stack milestones: (blocks, label, time label) ---

MILESTONE_THRESHOLDS = (
    (1, "1 block", "10 minutes"),
    (6, "6 blocks", "1 hour"),
    (144, "144 blocks", "1 day"),
    (1_008, "1,008 blocks", "1 week"),
    (4_320, "4,320 blocks", "1 month (30d)"),
)

# --- Live data / network constants ---
# Blockchain.info - est. 2011, Ben Reeves (UK), now Blockchain.com (not FOSS)
# Mempool.space - est. 2020, Self-hostable open-source Bitcoin explorer
BLOCKCHAIN_HASHRATE_HISTORY_URL = "https://api.blockchain.info/charts/hash-rate"
MEMPOOL_RECENT_BLOCKS_URL = "https://mempool.space/api/blocks"
FEE_SAMPLE_BLOCKS_DEFAULT = 25
FEE_SAMPLE_BLOCKS_MIN = 10
FEE_SAMPLE_BLOCKS_MAX = 50

# Requests / caching config
LIVE_DATA_REQUEST_TIMEOUT_S = 15
LIVE_DATA_CACHE_TTL_S = (
    60 * 60 * 24 if APP_ENV == ENV_DEV else 60 * 60
)  # 24h in dev, 1h in prod

LIVE_DATA_USER_AGENT = "SIDModel/0.1 (energy-cap valuation)"

# --- Chart styling ---

BITCOIN_ORANGE_HEX = "#F7931A"
DATE_DISPLAY_FMT = "%d %b %Y"

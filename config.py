import os


def _env_bool(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# ==================================================
# === SNAPSHOT SOURCE ===
# ==================================================
# The Factorio mod rewrites this file every few seconds from script-output.
METRICS_PATH = os.getenv("FACTORIO_METRICS_PATH", "/factorio/script-output/metrics.json")

# ==================================================
# === HTTP LISTENER ===
# ==================================================
METRICS_BIND = os.getenv("FACTORIO_METRICS_BIND", "127.0.0.1:9102")
METRICS_ROUTE = "/metrics"

# ==================================================
# === LOGGING ===
# ==================================================
VERBOSE = _env_bool("FACTORIO_VERBOSE", False)

# ==================================================
# === METRIC NAMING ===
# ==================================================
# Family names and label names are scraped by existing dashboards, don't rename.
METRIC_PREFIX = "factorio_"

# Entity ownership is not in the snapshot yet, every entity is reported for this force.
ENTITY_FORCE_LABEL = "player"

# Sub-trees of a force holding production stats, also used as the "type" label value.
PROTOTYPE_TYPES = ("items", "fluids")

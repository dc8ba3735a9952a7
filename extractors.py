from typing import NamedTuple

from config import METRIC_PREFIX, ENTITY_FORCE_LABEL, PROTOTYPE_TYPES


class MetricFamily(NamedTuple):
    name: str
    help: str
    type: str  # "counter" or "gauge"
    labelnames: tuple = ()


class Sample(NamedTuple):
    family: MetricFamily
    labels: tuple
    value: float


def _family(name, help_text, metric_type, *labelnames):
    return MetricFamily(f"{METRIC_PREFIX}{name}", help_text, metric_type, tuple(labelnames))


# ==================================================
# === METRIC FAMILIES ===
# ==================================================
GAME_TICK = _family("game_tick", "The current tick of the running Factorio game.", "counter")
GAME_PAUSED = _family("game_paused", "The current pause state of the running Factorio game.", "gauge")

PLAYER_CONNECTED = _family("player_connected", "The current connection state of the player.", "gauge", "username")

FORCE_RESEARCH_PROGRESS = _family(
    "force_research_progress",
    "The current research progress percentage (0-1) for a force.",
    "gauge", "force",
)
FORCE_PROTOTYPE_PRODUCTION = _family(
    "force_prototype_production",
    "The total production of a given prototype for a force.",
    "counter", "force", "prototype", "surface", "type",
)
FORCE_PROTOTYPE_CONSUMPTION = _family(
    "force_prototype_consumption",
    "The total consumption of a given prototype for a force.",
    "counter", "force", "prototype", "surface", "type",
)

SURFACE_POLLUTION_PRODUCTION = _family(
    "surface_pollution_production",
    "The pollution produced or consumed from various sources.",
    "gauge", "source", "surface",
)
SURFACE_POLLUTION_TOTAL = _family("surface_pollution_total", "The total pollution on a given surface.", "gauge", "surface")
SURFACE_TICKS_PER_DAY = _family("surface_ticks_per_day", "The number of ticks per day on a given surface.", "gauge", "surface")

ENTITY_COUNT = _family("entity_count", "The total number of entities.", "gauge", "force", "name", "surface")

ROCKETS_LAUNCHED = _family("rockets_launched", "The total number of rockets launched.", "counter", "force")
ITEMS_LAUNCHED = _family("items_launched", "The total number of items launched in rockets.", "counter", "force", "name")

# Exposition order.
FAMILIES = (
    GAME_TICK,
    GAME_PAUSED,
    PLAYER_CONNECTED,
    FORCE_RESEARCH_PROGRESS,
    FORCE_PROTOTYPE_PRODUCTION,
    FORCE_PROTOTYPE_CONSUMPTION,
    SURFACE_POLLUTION_PRODUCTION,
    SURFACE_POLLUTION_TOTAL,
    SURFACE_TICKS_PER_DAY,
    ENTITY_COUNT,
    ROCKETS_LAUNCHED,
    ITEMS_LAUNCHED,
)


# ==================================================
# === EXTRACTORS ===
# ==================================================
def collect_time_metrics(snapshot):
    paused = 1.0 if snapshot.boolean("game", "time", "paused") else 0.0
    return [
        Sample(GAME_TICK, (), snapshot.number("game", "time", "tick")),
        Sample(GAME_PAUSED, (), paused),
    ]


def collect_player_state_metrics(snapshot):
    samples = []
    for username in snapshot.keys("players"):
        connected = 1.0 if snapshot.boolean("players", username, "connected") else 0.0
        samples.append(Sample(PLAYER_CONNECTED, (username,), connected))
    return samples


def collect_force_metrics(snapshot):
    samples = []
    for force_name in snapshot.keys("forces"):
        force = snapshot.sub("forces", force_name)
        samples.append(Sample(FORCE_RESEARCH_PROGRESS, (force_name,), force.number("research", "progress")))

        for prototype_type in PROTOTYPE_TYPES:
            for surface_name in force.keys(prototype_type):
                surface = force.sub(prototype_type, surface_name)
                for prototype_name in surface.keys():
                    labels = (force_name, prototype_name, surface_name, prototype_type)

                    # Unused prototypes report 0, skip them to keep cardinality down
                    production = surface.number(prototype_name, "production")
                    if production > 0:
                        samples.append(Sample(FORCE_PROTOTYPE_PRODUCTION, labels, production))

                    consumption = surface.number(prototype_name, "consumption")
                    if consumption > 0:
                        samples.append(Sample(FORCE_PROTOTYPE_CONSUMPTION, labels, consumption))
    return samples


def collect_pollution_metrics(snapshot):
    samples = []
    for surface_name in snapshot.keys("pollution"):
        for source_name in snapshot.keys("pollution", surface_name):
            value = snapshot.number("pollution", surface_name, source_name)
            samples.append(Sample(SURFACE_POLLUTION_PRODUCTION, (source_name, surface_name), value))
    return samples


def collect_surface_metrics(snapshot):
    samples = []
    for surface_name in snapshot.keys("surfaces"):
        surface = snapshot.sub("surfaces", surface_name)
        samples.append(Sample(SURFACE_POLLUTION_TOTAL, (surface_name,), surface.number("pollution")))
        samples.append(Sample(SURFACE_TICKS_PER_DAY, (surface_name,), surface.number("ticks_per_day")))
    return samples


def collect_entity_metrics(snapshot):
    samples = []
    for surface_name in snapshot.keys("surfaces"):
        entities = snapshot.sub("surfaces", surface_name, "entities")
        for entity_name in entities.keys():
            labels = (ENTITY_FORCE_LABEL, entity_name, surface_name)
            samples.append(Sample(ENTITY_COUNT, labels, entities.number(entity_name)))
    return samples


def collect_rocket_metrics(snapshot):
    samples = []
    for force_name in snapshot.keys("forces"):
        rockets = snapshot.sub("forces", force_name, "rockets")
        samples.append(Sample(ROCKETS_LAUNCHED, (force_name,), float(rockets.integer("launches"))))
        for item_name in rockets.keys("items"):
            value = float(rockets.integer("items", item_name))
            samples.append(Sample(ITEMS_LAUNCHED, (force_name, item_name), value))
    return samples


PIPELINE = (
    collect_time_metrics,
    collect_player_state_metrics,
    collect_force_metrics,
    collect_pollution_metrics,
    collect_surface_metrics,
    collect_entity_metrics,
    collect_rocket_metrics,
)


def run_pipeline(snapshot):
    """Run every extractor over one snapshot, in pipeline order."""
    samples = []
    for extractor in PIPELINE:
        samples.extend(extractor(snapshot))
    return samples

import math
import sys
import threading

from flask import Flask, Response

from config import METRICS_ROUTE, VERBOSE
from extractors import FAMILIES, run_pipeline
from snapshot import LoadError, SnapshotStore, load_snapshot

CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"


class FactorioCollector:
    """
    Loads metrics.json and turns it into samples, one scrape at a time.

    The lock covers load, replace and extract, so a scrape never sees
    a snapshot from another scrape's load and scrapes never overlap.
    """

    def __init__(self, metrics_path, store=None, verbose=VERBOSE):
        self.metrics_path = metrics_path
        self.store = store if store is not None else SnapshotStore()
        self.verbose = verbose
        self._lock = threading.Lock()

    def collect(self):
        with self._lock:
            if self.verbose:
                print("🔍 Collecting metrics")

            try:
                snapshot = load_snapshot(self.metrics_path)
            except LoadError as e:
                self.store.record_error(e)
                print(f"❌ Error reading metrics data: {e}", file=sys.stderr)
                return []

            self.store.replace(snapshot)
            samples = run_pipeline(self.store.current())

            if self.verbose:
                print(f"✅ Collected {len(samples)} metrics")
            return samples


# ==================================================
# === EXPOSITION TEXT FORMAT ===
# ==================================================
def escape_label_value(value):
    return value.replace("\\", "\\\\").replace("\n", "\\n").replace('"', '\\"')


def escape_help(text):
    return text.replace("\\", "\\\\").replace("\n", "\\n")


def format_value(value):
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value.is_integer() and abs(value) < 1e15:
        return str(int(value))
    return repr(value)


def render_exposition(samples):
    """Render samples grouped by family, in family order. Families without samples are left out."""
    by_family = {}
    for sample in samples:
        by_family.setdefault(sample.family.name, []).append(sample)

    lines = []
    for family in FAMILIES:
        family_samples = by_family.get(family.name)
        if not family_samples:
            continue

        lines.append(f"# HELP {family.name} {escape_help(family.help)}")
        lines.append(f"# TYPE {family.name} {family.type}")
        for sample in family_samples:
            if family.labelnames:
                label_str = ",".join(
                    f'{name}="{escape_label_value(str(value))}"'
                    for name, value in zip(family.labelnames, sample.labels)
                )
                lines.append(f"{family.name}{{{label_str}}} {format_value(float(sample.value))}")
            else:
                lines.append(f"{family.name} {format_value(float(sample.value))}")

    if not lines:
        return ""
    return "\n".join(lines) + "\n"


# ==================================================
# === HTTP ===
# ==================================================
LANDING_PAGE = """<html>
<head><title>Factorio Exporter</title></head>
<body>
<h1>Factorio Exporter</h1>
<p><a href="{route}">Metrics</a></p>
</body>
</html>
"""


def create_app(collector):
    app = Flask(__name__)

    @app.route(METRICS_ROUTE)
    def metrics():
        # A failed load still answers 200 with an empty body
        return Response(render_exposition(collector.collect()), content_type=CONTENT_TYPE)

    @app.route("/")
    def index():
        return Response(LANDING_PAGE.format(route=METRICS_ROUTE), mimetype="text/html")

    return app

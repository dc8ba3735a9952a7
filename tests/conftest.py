import json

import pytest


@pytest.fixture
def game_state():
    """A metrics.json payload as the mod writes it mid-game."""
    return {
        "game": {"time": {"tick": 123456, "paused": False}},
        "players": {
            "alice": {"connected": True},
            "bob": {"connected": False},
        },
        "forces": {
            "player": {
                "research": {"progress": 0.25},
                "items": {
                    "nauvis": {
                        "iron-plate": {"production": 500, "consumption": 120},
                        "wooden-chest": {"production": 0, "consumption": 0},
                    },
                },
                "fluids": {
                    "nauvis": {
                        "water": {"production": 1000.5, "consumption": 0},
                    },
                },
                "rockets": {
                    "launches": 2,
                    "items": {"satellite": 2},
                },
            },
        },
        "pollution": {
            "nauvis": {"boiler": 30.5, "tree": -4},
        },
        "surfaces": {
            "nauvis": {
                "pollution": 1234.5,
                "ticks_per_day": 25000,
                "entities": {"assembling-machine-1": 12, "transport-belt": 340},
            },
        },
    }


@pytest.fixture
def write_snapshot(tmp_path):
    path = tmp_path / "metrics.json"

    def _write(data):
        if isinstance(data, str):
            path.write_text(data, encoding="utf-8")
        else:
            path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write

"""
Pytest configuration and fixtures for verb-engine tests.
"""

import sys
from pathlib import Path

import pytest

# Add src directory to Python path to allow importing verb_engine
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from verb_engine import build_index, load_catalog, merge_catalogs  # noqa: E402


ALL_REGIONS = ["rioplatense", "la_general", "peninsular"]


def _f(mood, tense, person, value, **accepts):
    form = {"mood": mood, "tense": tense, "person": person, "value": value}
    if accepts:
        form["accepts"] = accepts
    return form


MAIN_VERBS = [
    {
        "id": "sacar",
        "lemma": "sacar",
        "type": "irregular",
        "paradigms": [
            {
                "regionTags": ALL_REGIONS,
                "forms": [
                    _f("indicative", "pres", "1s", "saco"),
                    _f("indicative", "pres", "2s_tu", "sacas", vos="sacás"),
                    _f("indicative", "pres", "3s", "saca"),
                    _f("indicative", "pretIndef", "1s", "saqué"),
                    _f("indicative", "pretIndef", "2s_tu", "sacaste", vos="sacaste"),
                    _f("indicative", "pretIndef", "3s", "sacó"),
                    _f("subjunctive", "subjPres", "1s", "saque"),
                    _f("nonfinite", "inf", "", "sacar"),
                    _f("nonfinite", "ger", "", "sacando"),
                ],
            }
        ],
        "irregularityMatrix": {"pretIndef": True, "subjPres": True},
    },
    {
        "id": "cerrar",
        "lemma": "cerrar",
        "type": "irregular",
        "paradigms": [
            {
                "regionTags": ALL_REGIONS,
                "forms": [
                    _f("indicative", "pres", "1s", "cierro"),
                    _f("indicative", "pres", "2s_tu", "cierras", vos="cerrás"),
                    _f("subjunctive", "subjPres", "1s", "cierre"),
                    _f("subjunctive", "subjPres", "2s_tu", "cierres", vos="cierres"),
                    _f("imperative", "impAff", "2s_tu", "cierra"),
                    _f("nonfinite", "inf", "", "cerrar"),
                ],
            }
        ],
    },
    {
        "id": "abolir",
        "lemma": "abolir",
        "type": "irregular",
        "paradigms": [
            {
                "regionTags": ALL_REGIONS,
                "forms": [
                    _f("indicative", "pres", "1p", "abolimos"),
                    _f("indicative", "pres", "2p_vosotros", "abolís"),
                    _f("indicative", "impf", "1s", "abolía"),
                    _f("nonfinite", "inf", "", "abolir"),
                ],
            }
        ],
    },
    {
        "id": "vivir",
        "lemma": "vivir",
        "type": "regular",
        "paradigms": [
            {
                "regionTags": ["la_general", "peninsular"],
                "forms": [
                    _f("indicative", "pres", "1s", "vivo"),
                    _f("indicative", "pres", "2s_tu", "vives", vosotros="vivís"),
                    _f("indicative", "pres", "2p_vosotros", "vivís"),
                    _f("nonfinite", "inf", "inv", "vivir"),
                ],
            },
            {
                "regionTags": ["rioplatense"],
                "forms": [
                    _f("indicative", "pres", "1s", "vivo"),
                    _f("indicative", "pres", "2s_vos", "vivís", tu="vives"),
                    _f("nonfinite", "inf", "", "vivir"),
                ],
            },
        ],
    },
]

PRIORITY_VERBS = [
    {
        "id": "sacar_priority",
        "lemma": "sacar",
        "type": "irregular",
        "paradigms": [
            {
                "regionTags": ALL_REGIONS,
                "forms": [_f("indicative", "pretIndef", "1s", "saqué (priority)")],
            }
        ],
    },
    {
        "id": "coger_priority",
        "lemma": "coger",
        "type": "irregular",
        "paradigms": [
            {
                "regionTags": ["peninsular"],
                "forms": [
                    _f("indicative", "pres", "1s", "cojo"),
                    _f("indicative", "pres", "2s_tu", "coges"),
                    _f("nonfinite", "inf", "", "coger"),
                ],
            }
        ],
    },
    {
        "id": "haber_priority",
        "lemma": "haber",
        "type": "irregular",
        "paradigms": [
            {
                "regionTags": ALL_REGIONS,
                "forms": [
                    _f("indicative", "pres", "1s", "he"),
                    _f("indicative", "pres", "2s_tu", "has", vos="has"),
                    _f("nonfinite", "inf", "", "haber"),
                ],
            }
        ],
    },
]

AUTO_ADDED_VERBS = [
    {
        "lemma": "soler",
        "type": "irregular",
        "irregularityMatrix": {"pres": True, "subjPres": True},
    },
    {
        "id": "coger_auto",
        "lemma": "coger",
        "irregularityMatrix": {"pres": False},
    },
]


@pytest.fixture
def main_records():
    return load_catalog(MAIN_VERBS).records


@pytest.fixture
def priority_records():
    return load_catalog(PRIORITY_VERBS).records


@pytest.fixture
def auto_records():
    return load_catalog(AUTO_ADDED_VERBS).records


@pytest.fixture
def merged(main_records, priority_records, auto_records):
    return merge_catalogs(main_records, [priority_records, auto_records])


@pytest.fixture
def index(merged):
    return build_index(merged)


@pytest.fixture
def raw_catalogs():
    return {"main": MAIN_VERBS, "priority": PRIORITY_VERBS, "auto": AUTO_ADDED_VERBS}


# Imperfect subjunctive rows carry the -se spelling as a dialect-free alternate.
COMER_VERB = {
    "id": "comer",
    "lemma": "comer",
    "type": "regular",
    "paradigms": [
        {
            "regionTags": ALL_REGIONS,
            "forms": [
                _f("indicative", "pres", "1s", "como"),
                {"mood": "subjunctive", "tense": "subjImpf", "person": "1s",
                 "value": "comiera", "alt": ["comiese"]},
                {"mood": "subjunctive", "tense": "subjImpf", "person": "2s_tu",
                 "value": "comieras", "alt": ["comieses"], "accepts": {"vos": "comieras"}},
                _f("nonfinite", "inf", "", "comer"),
            ],
        },
    ],
}


@pytest.fixture
def comer_records():
    return [COMER_VERB]


@pytest.fixture
def comer_index():
    return build_index(load_catalog([COMER_VERB]).records)

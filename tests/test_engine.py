"""
Tests for VerbEngine.

Covers the full path from raw catalogs to answer checks.
"""

import json

import pytest

from verb_engine import (
    DataIntegrityError,
    EngineConfig,
    NotApplicable,
    NotFound,
    SurfaceForm,
    VerbEngine,
)
from verb_engine.models import Region


@pytest.fixture
def engine(raw_catalogs):
    return VerbEngine.from_records(
        raw_catalogs["main"],
        [raw_catalogs["priority"], raw_catalogs["auto"]],
    )


BROKEN_SACAR = {"id": "sacar_broken", "lemma": "sacar", "paradigms": []}


class TestFromRecords:
    """Test engine construction."""

    def test_builds_merged_index(self, engine) -> None:
        assert set(engine.index.lemmas()) == {
            "sacar", "cerrar", "abolir", "vivir", "coger", "haber", "soler",
        }
        assert engine.errors == ()

    def test_load_errors_collected(self, raw_catalogs) -> None:
        engine = VerbEngine.from_records([BROKEN_SACAR, *raw_catalogs["main"][1:]])
        assert [e.lemma for e in engine.errors] == ["sacar"]
        assert "sacar" not in engine.index

    def test_rejected_primary_entry_leaves_gap_for_supplementary(self, raw_catalogs) -> None:
        engine = VerbEngine.from_records([BROKEN_SACAR], [raw_catalogs["priority"]])
        result = engine.resolve("sacar", "indicative", "pretIndef", "1s", "rioplatense")
        assert result.value == "saqué (priority)"
        assert len(engine.errors) == 1

    def test_strict_integrity(self) -> None:
        with pytest.raises(DataIntegrityError):
            VerbEngine.from_records([BROKEN_SACAR], config=EngineConfig(strict_integrity=True))

    def test_from_files(self, tmp_path, raw_catalogs) -> None:
        main = tmp_path / "verbs.json"
        priority = tmp_path / "priority.json"
        main.write_text(json.dumps(raw_catalogs["main"], ensure_ascii=False), encoding="utf-8")
        priority.write_text(json.dumps({"verbs": raw_catalogs["priority"]}, ensure_ascii=False), encoding="utf-8")

        engine = VerbEngine.from_files(main, [priority])
        assert engine.resolve("coger", "indicative", "pres", "1s", "peninsular").value == "cojo"


class TestResolveAndCheck:
    """Test lookups through the engine."""

    def test_default_region(self, engine) -> None:
        result = engine.resolve("sacar", "indicative", "pres", "2s_tu")
        assert result.region is Region.LA_GENERAL

    def test_configured_default_region(self, raw_catalogs) -> None:
        engine = VerbEngine.from_records(
            raw_catalogs["main"],
            config=EngineConfig(default_region="rioplatense"),
        )
        assert engine.resolve("vivir", "indicative", "pres", "2s_vos").value == "vivís"

    def test_sacar_scenario(self, engine) -> None:
        resolved = engine.resolve("sacar", "indicative", "pretIndef", "1s", "rioplatense")
        assert resolved.value == "saqué"
        assert engine.check(resolved, "saqué").correct
        assert not engine.check(resolved, "saque").correct
        assert engine.check(resolved, "saque", accent_insensitive=True).correct

    def test_configured_accent_policy(self, raw_catalogs) -> None:
        engine = VerbEngine.from_records(
            raw_catalogs["main"],
            config=EngineConfig(accent_insensitive=True),
        )
        resolved = engine.resolve("sacar", "indicative", "pretIndef", "1s", "rioplatense")
        assert engine.check(resolved, "saque").correct

    def test_configured_dialects(self, raw_catalogs) -> None:
        engine = VerbEngine.from_records(
            raw_catalogs["main"],
            config=EngineConfig(region_dialects={"la_general": ["vos"]}),
        )
        resolved = engine.resolve("sacar", "indicative", "pres", "2s_tu", "la_general")
        assert engine.check(resolved, "sacás").matched_variant == "vos"

    def test_resolve_and_check(self, engine) -> None:
        resolved, check = engine.resolve_and_check(
            "cerrar", "subjunctive", "subjPres", "2s_vos", "cierres", "rioplatense",
        )
        assert isinstance(resolved, SurfaceForm)
        assert resolved.via_fallback
        assert check.correct

    def test_alt_spelling_through_engine(self, comer_records) -> None:
        engine = VerbEngine.from_records(comer_records)
        resolved, check = engine.resolve_and_check(
            "comer", "subjunctive", "subjImpf", "1s", "comiese", "peninsular",
        )
        assert resolved.value == "comiera"
        assert check.correct
        assert check.targets == ("comiera", "comiese")

    def test_resolve_and_check_not_applicable(self, engine) -> None:
        resolved, check = engine.resolve_and_check("abolir", "indicative", "pres", "1s", "abolo")
        assert isinstance(resolved, NotApplicable)
        assert check is None

    def test_resolve_and_check_not_found(self, engine) -> None:
        resolved, check = engine.resolve_and_check("coger", "indicative", "pres", "1s", "cojo", "rioplatense")
        assert isinstance(resolved, NotFound)
        assert check is None

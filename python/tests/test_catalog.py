"""Catalog loading — GeoJSON / TopoJSON regions, city records, fallbacks."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from backend.models.catalog import Catalog, CatalogError, parse_regions, parse_settlements
from backend.models.entity import CapitalRank, Region, RegionKind, Settlement

DATA_DIR = Path(__file__).resolve().parent.parent.parent / "data"


def _feature(**props) -> dict:
    return {"type": "Feature", "properties": props, "geometry": None}


def _collection(*features: dict) -> dict:
    return {"type": "FeatureCollection", "features": list(features)}


# -- regions ------------------------------------------------------------------


def test_parse_geojson_regions() -> None:
    regions = parse_regions(
        _collection(_feature(name="Ontario", id="ON"), _feature(name="Quebec", id="QC"))
    )
    assert regions == [Region("ON", "Ontario"), Region("QC", "Quebec")]


def test_parse_topojson_regions() -> None:
    topology = {
        "type": "Topology",
        "objects": {
            "provinces": {
                "type": "GeometryCollection",
                "geometries": [
                    {"type": "Polygon", "arcs": [[0]], "properties": {"name": "Yukon", "id": "YT"}},
                ],
            }
        },
        "arcs": [],
    }
    assert parse_regions(topology) == [Region("YT", "Yukon", RegionKind.TERRITORY)]


def test_region_name_and_id_fallbacks() -> None:
    regions = parse_regions(
        _collection(
            _feature(PRENAME="Manitoba", PRUID="46"),
            _feature(name="Alberta"),
            _feature(),
        )
    )
    assert regions[0] == Region("46", "Manitoba")
    assert regions[1] == Region("Alberta", "Alberta")
    assert regions[2].name == "Unknown region 3"
    assert regions[2].id == "Unknown region 3"


def test_feature_without_properties_gets_placeholder() -> None:
    regions = parse_regions({"type": "FeatureCollection", "features": [{"type": "Feature"}, "junk"]})
    assert [r.name for r in regions] == ["Unknown region 1", "Unknown region 2"]


@pytest.mark.parametrize(
    ("props", "kind"),
    [
        ({"id": "NU", "name": "Nunavut"}, RegionKind.TERRITORY),
        ({"PRUID": "61", "name": "Northwest Territories"}, RegionKind.TERRITORY),
        ({"id": "ON", "name": "Ontario"}, RegionKind.PROVINCE),
        ({"id": "X", "name": "Somewhere", "type": "Territory"}, RegionKind.TERRITORY),
    ],
    ids=["code", "pruid", "province", "declared"],
)
def test_region_kind(props: dict, kind: RegionKind) -> None:
    assert parse_regions(_collection(_feature(**props)))[0].kind is kind


@pytest.mark.parametrize(
    "data",
    [[], {"type": "Feature"}, {"type": "Topology", "objects": {}}],
    ids=["list", "single-feature", "empty-topology"],
)
def test_bad_boundary_structure(data) -> None:
    with pytest.raises(CatalogError):
        parse_regions(data)


# -- settlements --------------------------------------------------------------


def test_parse_census_style_cities() -> None:
    (ottawa,) = parse_settlements(
        [
            {
                "Name": "Ottawa",
                "Prov_Ter": "ON",
                "Population": 1017449,
                "Latitude": 45.4215,
                "Longitude": -75.6972,
                "Capital": "FEDERAL",
            }
        ]
    )
    assert ottawa == Settlement("Ottawa", "ON", 45.4215, -75.6972, CapitalRank.FEDERAL, 1017449)
    assert ottawa.id == "Ottawa"
    assert ottawa.is_capital


def test_parse_lowercase_cities() -> None:
    (toronto,) = parse_settlements(
        [{"name": "Toronto", "provinceId": "ON", "lat": 43.65, "lng": -79.38, "isCapital": True}]
    )
    assert toronto.region_id == "ON"
    assert toronto.latitude == 43.65
    assert toronto.capital is CapitalRank.PROVINCIAL


def test_malformed_city_fields_fall_back() -> None:
    settlements = parse_settlements(
        [{"Prov_Ter": "ON", "Latitude": "north", "Capital": "IMPERIAL"}, 42]
    )
    assert len(settlements) == 1
    assert settlements[0].name == "Unknown settlement 1"
    assert settlements[0].latitude == 0.0
    assert settlements[0].capital is None


@pytest.mark.parametrize("bad", ["NaN", "inf", "-Infinity"], ids=["nan", "inf", "neg-inf"])
def test_non_finite_numbers_fall_back(tmp_path: Path, bad: str) -> None:
    cities = tmp_path / "cities.json"
    cities.write_text(
        json.dumps([{"Name": "A", "Population": bad, "Latitude": bad}, {"Name": "B"}])
    )

    catalog = Catalog.load(cities_path=cities)

    assert [s.name for s in catalog.settlements] == ["A", "B"]
    assert catalog.settlements[0].population == 0
    assert catalog.settlements[0].latitude == 0.0


def test_cities_must_be_a_list() -> None:
    with pytest.raises(CatalogError):
        parse_settlements({"Name": "Ottawa"})


# -- catalog ------------------------------------------------------------------


def test_duplicate_names_dropped_within_variant() -> None:
    catalog = Catalog.from_entities(
        regions=[Region("QC", "Quebec"), Region("QC2", "Quebec")],
        settlements=[Settlement("Quebec")],
    )
    assert catalog.regions == (Region("QC", "Quebec"),)
    # The same name in the other variant is kept.
    assert catalog.settlements == (Settlement("Quebec"),)


def test_load_from_files(tmp_path: Path) -> None:
    cities = tmp_path / "cities.json"
    regions = tmp_path / "regions.geojson"
    cities.write_text(json.dumps([{"Name": "Ottawa", "Prov_Ter": "ON"}]))
    regions.write_text(json.dumps(_collection(_feature(name="Ontario", id="ON"))))

    catalog = Catalog.load(cities_path=cities, regions_path=regions)
    assert catalog.all_names == {"Ottawa", "Ontario"}


def test_load_with_one_variant(tmp_path: Path) -> None:
    regions = tmp_path / "regions.geojson"
    regions.write_text(json.dumps(_collection(_feature(name="Ontario", id="ON"))))
    catalog = Catalog.load(regions_path=regions)
    assert catalog.settlements == ()
    assert not catalog.is_empty


def test_load_missing_file(tmp_path: Path) -> None:
    with pytest.raises(CatalogError, match="Cannot read"):
        Catalog.load(cities_path=tmp_path / "nope.json")


def test_load_invalid_json(tmp_path: Path) -> None:
    bad = tmp_path / "bad.json"
    bad.write_text("{not json")
    with pytest.raises(CatalogError, match="Invalid JSON"):
        Catalog.load(regions_path=bad)


def test_bundled_data() -> None:
    catalog = Catalog.load(
        cities_path=DATA_DIR / "cities.json",
        regions_path=DATA_DIR / "provinces.geojson",
    )
    summary = catalog.summary()
    assert summary["provinces"] == 10
    assert summary["territories"] == 3
    assert summary["capitals"] == 14
    assert catalog.find_settlement("St. John's") is not None


def test_find_region(catalog: Catalog) -> None:
    assert catalog.find_region("on").name == "Ontario"
    assert catalog.find_region(" Yukon ").id == "YT"
    assert catalog.find_region("ZZ") is None

"""
Categorical presence extractor: header index, per-record and per-frame presence.
"""
import pandas as pd

from tourism_insights.analytics.presence import (
    build_column_index, build_schema_index, has_category, presence_counts, presence_mask,
)
from tourism_insights.data.schemas import CategoryKind

from conftest import SMALL_CONFIG


COLUMNS = ["Edad", "Taxi_a", "Taxi_b", "taxi_c", "Parques", "Parques de aventuras"]


def test_index_matches_substrings_case_sensitively():
    index = build_column_index(COLUMNS, ["Taxi", "Bicicleta"])
    assert index == {"Taxi": ("Taxi_a", "Taxi_b"), "Bicicleta": ()}


def test_index_keeps_label_order():
    index = build_column_index(COLUMNS, ["Parques", "Taxi"])
    assert list(index) == ["Parques", "Taxi"]
    # A shorter label also picks up the longer header that contains it
    assert index["Parques"] == ("Parques", "Parques de aventuras")


def test_schema_index_covers_presence_kinds():
    schema = build_schema_index(COLUMNS, SMALL_CONFIG)
    assert set(schema.columns) == {CategoryKind.TRANSPORT, CategoryKind.ACTIVITY, CategoryKind.PLACE}
    assert schema.for_kind(CategoryKind.TRANSPORT)["Taxi"] == ("Taxi_a", "Taxi_b")
    assert schema.for_kind(CategoryKind.SPENDING) == {}


def test_any_matching_column_counts():
    record = {"Taxi_a": False, "Taxi_b": True}
    assert has_category(record, ("Taxi_a", "Taxi_b")) is True


def test_no_matching_columns_is_never_present():
    assert has_category({"Taxi_a": True}, ()) is False


def test_absent_column_in_record_is_not_present():
    assert has_category({}, ("Taxi_a",)) is False


def test_presence_mask_counts_a_row_once():
    df = pd.DataFrame({
        "Taxi_a": [True, False, False, None],
        "Taxi_b": [True, True, False, ""],
    })
    mask = presence_mask(df, ("Taxi_a", "Taxi_b"))
    assert mask.tolist() == [True, True, False, False]
    assert int(mask.sum()) == 2


def test_presence_mask_without_columns():
    df = pd.DataFrame({"Edad": [20, 30]})
    assert presence_mask(df, ()).tolist() == [False, False]
    assert presence_mask(df, ("Missing",)).tolist() == [False, False]


def test_presence_counts_in_label_order():
    df = pd.DataFrame({"Taxi_a": [1, 0, 1], "Bici": [0, 0, 0]})
    counts = presence_counts(df, {"Taxi": ("Taxi_a",), "Bicicleta": ()})
    assert counts == {"Taxi": 2, "Bicicleta": 0}
    assert list(counts) == ["Taxi", "Bicicleta"]

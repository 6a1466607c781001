import pytest

from id_allocator.analysis import Context, ContextAnalyzer, analyze_context, mode_of, split_name
from id_allocator.ids import IDClass

HEADERS = ["District", "Mandal", "Benificiary Name", "Ticket Number", "FTR Number", "Stage Level"]

def test_mode_picks_most_frequent():
    assert mode_of(["A", "A", "B"]) == "A"

def test_mode_of_blank_column_is_none():
    assert mode_of(["", None, "   "]) is None
    assert mode_of([]) is None

def test_mode_ties_go_to_first_seen():
    assert mode_of(["B", "A", "A", "B"]) == "B"

def test_mode_trims_values():
    assert mode_of([" A", "A ", "B"]) == "A"

def test_split_name_surname_first():
    assert split_name("Kommu Ravi Kumar") == ("Kommu", "Ravi Kumar")
    assert split_name("Lakshmi") == (None, "Lakshmi")
    assert split_name("   ") == (None, None)

def test_context_modes_and_pools():
    rows = [
        ["Guntur", "Tenali", "Kommu Ravi", "2000000005", "3000000001", "Roof"],
        ["Guntur", "Ponnur", "Lakshmi", "", "", "Basement"],
        ["Krishna", "Tenali", "Pilli Rama Devi", "2000000009", "3000000004", "Roof"],
    ]
    ctx = analyze_context(HEADERS, rows)

    assert ctx.district_mode == "Guntur"
    assert ctx.mandal_mode == "Tenali"
    assert ctx.location_pool.districts == ("Guntur", "Krishna")
    assert ctx.location_pool.mandals == ("Tenali", "Ponnur")
    assert ctx.name_pool.surnames == ("Kommu", "Pilli")
    assert ctx.name_pool.given_names == ("Ravi", "Lakshmi", "Rama Devi")

def test_column_options_skip_reserved_columns():
    rows = [
        ["Guntur", "Tenali", "Kommu Ravi", "2000000005", "3000000001", "Roof"],
        ["Guntur", "Tenali", "Sita", "2000000006", "3000000002", "Roof"],
        ["Guntur", "Tenali", "Sita", "2000000007", "3000000003", ""],
    ]
    ctx = analyze_context(HEADERS, rows)
    assert ctx.column_options == {"Stage Level": ("Roof",)}

def test_local_maxima_and_existing_ids():
    rows = [
        ["Guntur", "Tenali", "Ravi", "2000000005", "3000000001", "Roof"],
        ["Guntur", "Tenali", "Ravi", "2000000009", "", "Roof"],
        ["Guntur", "Tenali", "Ravi", "2000000002.0", "", "Roof"],
    ]
    ctx = analyze_context(HEADERS, rows)
    assert ctx.local_max_by_class == {IDClass.TICKET: 2000000009, IDClass.FTR: 3000000001}
    assert ctx.existing_for(IDClass.TICKET) == {"2000000005", "2000000009", "2000000002"}
    assert ctx.existing_for(IDClass.REGISTRATION) == frozenset()

def test_numeric_cells_are_read_as_text():
    rows = [["Guntur", "Tenali", "Ravi", 2000000005.0, 3000000001, "Roof"]]
    ctx = analyze_context(HEADERS, rows)
    assert ctx.existing_for(IDClass.TICKET) == {"2000000005"}
    assert ctx.local_max_by_class[IDClass.FTR] == 3000000001

def test_float_and_exponent_id_text_is_canonical():
    rows = [
        ["Guntur", "Tenali", "Ravi", "2000000011.00", "3E+9", "Roof"],
        ["Guntur", "Tenali", "Ravi", " 2000000012 ", "3.000000007e9", "Roof"],
    ]
    ctx = analyze_context(HEADERS, rows)
    assert ctx.existing_for(IDClass.TICKET) == {"2000000011", "2000000012"}
    assert ctx.existing_for(IDClass.FTR) == {"3000000000", "3000000007"}
    assert ctx.local_max_by_class[IDClass.TICKET] == 2000000012

def test_columns_without_digits_have_no_local_max():
    rows = [
        ["Guntur", "Tenali", "Ravi", "pending", "", "Roof"],
        ["Guntur", "Tenali", "Ravi", "", "3000000004", "Roof"],
    ]
    ctx = analyze_context(HEADERS, rows)
    assert ctx.local_max_by_class == {IDClass.FTR: 3000000004}
    assert ctx.existing_for(IDClass.TICKET) == {"pending"}

def test_short_rows_and_missing_columns():
    ctx = ContextAnalyzer().analyze(["Stage Level", "Notes"], [["Roof"], []])
    assert ctx.district_mode is None
    assert ctx.name_pool.given_names == ()
    assert ctx.local_max_by_class == {}
    assert ctx.column_options == {"Stage Level": ("Roof",), "Notes": ()}

def test_analyze_dataset(small_dataset):
    ctx = ContextAnalyzer().analyze_dataset(small_dataset)
    assert ctx.district_mode == "Guntur"
    assert ctx.existing_for(IDClass.FTR) == {"3000000001", "3000000002"}

def test_context_mappings_are_read_only(small_dataset):
    ctx = ContextAnalyzer().analyze_dataset(small_dataset)
    with pytest.raises(TypeError):
        ctx.column_options["Stage Level"] = ("Slab",)
    with pytest.raises(TypeError):
        ctx.local_max_by_class[IDClass.TICKET] = 0
    with pytest.raises(TypeError):
        ctx.existing_ids[IDClass.TICKET] = frozenset()

def test_context_wraps_caller_supplied_dicts():
    options = {"Stage Level": ("Roof",)}
    ctx = Context(column_options=options)
    options["Notes"] = ("x",)
    assert ctx.column_options == {"Stage Level": ("Roof",)}
    with pytest.raises(TypeError):
        ctx.column_options["Notes"] = ()
    assert Context().existing_for(IDClass.TICKET) == frozenset()

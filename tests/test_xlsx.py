import dataclasses
import io
import math
import zipfile
from typing import Annotated
from xml.sax.saxutils import escape

import pytest

from chatkit import xlsx
from chatkit.xlsx import Kind, User

MAIN_NS = "http://schemas.openxmlformats.org/spreadsheetml/2006/main"
REL_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
PKG_NS = "http://schemas.openxmlformats.org/package/2006/relationships"
WS_TYPE = REL_NS + "/worksheet"


def _make_xlsx(sheets, shared=False):
    buf = io.BytesIO()
    strings = []
    with zipfile.ZipFile(buf, "w") as zf:
        sheet_entries = []
        rel_entries = []
        for number, (name, rows) in enumerate(sheets.items(), start=1):
            sheet_entries.append(f'<sheet name="{name}" sheetId="{number}" r:id="rId{number}"/>')
            rel_entries.append(
                f'<Relationship Id="rId{number}" Type="{WS_TYPE}" Target="worksheets/sheet{number}.xml"/>'
            )
            row_xml = []
            for y, row in enumerate(rows, start=1):
                cells = []
                for x, value in enumerate(row, start=1):
                    ref = xlsx.get_axis(x, y)
                    if value == "" or value is None:
                        continue
                    if isinstance(value, (int, float)):
                        cells.append(f'<c r="{ref}"><v>{value}</v></c>')
                    elif shared:
                        strings.append(value)
                        cells.append(f'<c r="{ref}" t="s"><v>{len(strings) - 1}</v></c>')
                    else:
                        cells.append(f'<c r="{ref}" t="inlineStr"><is><t>{escape(value)}</t></is></c>')
                row_xml.append(f'<row r="{y}">{"".join(cells)}</row>')
            zf.writestr(
                f"xl/worksheets/sheet{number}.xml",
                f'<worksheet xmlns="{MAIN_NS}"><sheetData>{"".join(row_xml)}</sheetData></worksheet>',
            )
        zf.writestr(
            "xl/workbook.xml",
            f'<workbook xmlns="{MAIN_NS}" xmlns:r="{REL_NS}"><sheets>{"".join(sheet_entries)}</sheets></workbook>',
        )
        zf.writestr("xl/_rels/workbook.xml.rels", f'<Relationships xmlns="{PKG_NS}">{"".join(rel_entries)}</Relationships>')
        if shared:
            items = "".join(f"<si><t>{escape(s)}</t></si>" for s in strings)
            zf.writestr("xl/sharedStrings.xml", f'<sst xmlns="{MAIN_NS}">{items}</sst>')
    return buf.getvalue()


@dataclasses.dataclass
class Score:
    name: str = dataclasses.field(default="", metadata=xlsx.column("name"))
    points: int = 0
    small: Annotated[int, Kind.INT8] = dataclasses.field(default=0, metadata=xlsx.column("small"))
    active: bool = False
    ratio: float = 0.0
    note: str = dataclasses.field(default="keep", metadata=xlsx.column("-"))


@dataclasses.dataclass
class Hidden:
    secret_note: str = dataclasses.field(default="", metadata=xlsx.column("-"))


def test_num_to_az_pinned_values():
    assert xlsx.num_to_az(1) == "A"
    assert xlsx.num_to_az(26) == "Z"
    assert xlsx.num_to_az(27) == "AA"
    assert xlsx.num_to_az(702) == "ZZ"
    assert xlsx.num_to_az(703) == "AAA"


def test_num_to_az_is_unique_and_ordered():
    names = [xlsx.num_to_az(n) for n in range(1, 2000)]
    assert len(set(names)) == len(names)
    assert names == sorted(names, key=lambda s: (len(s), s))


def test_num_to_az_negative_raises():
    with pytest.raises(ValueError):
        xlsx.num_to_az(-1)


def test_get_axis_joins_column_and_row():
    assert xlsx.get_axis(1, 1) == "A1"
    assert xlsx.get_axis(26, 40) == "Z40"


@pytest.mark.parametrize(
    "text,expected",
    [("TRUE", True), ("t", True), ("1", True), ("False", False), ("f", False), ("0", False)],
)
def test_string_to_bool(text, expected):
    assert xlsx.string_to_value(text, Kind.BOOL) is expected


def test_string_to_bool_invalid():
    with pytest.raises(ValueError, match="to bool error"):
        xlsx.string_to_value("yes", Kind.BOOL)


def test_string_to_int_ranges():
    assert xlsx.string_to_value("127", Kind.INT8) == 127
    assert xlsx.string_to_value("-128", Kind.INT8) == -128
    assert xlsx.string_to_value("+5", Kind.INT) == 5
    with pytest.raises(ValueError):
        xlsx.string_to_value("128", Kind.INT8)
    with pytest.raises(ValueError):
        xlsx.string_to_value("1.5", Kind.INT32)


def test_string_to_uint_rejects_sign():
    assert xlsx.string_to_value("255", Kind.UINT8) == 255
    with pytest.raises(ValueError):
        xlsx.string_to_value("-1", Kind.UINT)
    with pytest.raises(ValueError):
        xlsx.string_to_value("256", Kind.UINT8)


def test_string_to_float():
    assert xlsx.string_to_value("1.5", Kind.FLOAT64) == 1.5
    assert xlsx.string_to_value("0.1", Kind.FLOAT32) == pytest.approx(0.1, rel=1e-6)
    assert xlsx.string_to_value("inf", Kind.FLOAT64) == math.inf
    with pytest.raises(ValueError):
        xlsx.string_to_value("1e39", Kind.FLOAT32)
    with pytest.raises(ValueError):
        xlsx.string_to_value("1e400", Kind.FLOAT64)
    with pytest.raises(ValueError):
        xlsx.string_to_value("abc", Kind.FLOAT64)


def test_empty_string_gives_zero_value():
    for kind in Kind:
        assert xlsx.string_to_value("", kind) == xlsx.zero_value(kind)


def test_zero_values():
    assert xlsx.zero_value(Kind.BOOL) is False
    assert xlsx.zero_value(Kind.UINT64) == 0
    assert xlsx.zero_value(Kind.FLOAT32) == 0.0
    assert xlsx.zero_value(Kind.STRING) == ""
    with pytest.raises(TypeError):
        xlsx.zero_value("complex")


def test_get_sheet_name():
    assert xlsx.get_sheet_name(User) == "user"
    assert xlsx.get_sheet_name([User()]) == "user"
    assert xlsx.get_sheet_name(Score) == "Score"
    assert xlsx.get_sheet_name(42) == ""


def test_workbook_cells_and_index():
    data = _make_xlsx({"first": [["a", "b"]], "Second": [["x"], ["y", 3]]}, shared=True)
    with xlsx.open_workbook(io.BytesIO(data)) as wb:
        assert wb.get_sheet_index("first") == 0
        assert wb.get_sheet_index("second") == 1
        assert wb.get_sheet_index("missing") == -1
        assert wb.get_cell_value("Second", "B2") == "3"
        assert wb.get_cell_value("first", "b1") == "b"
        assert wb.get_cell_value("first", "C9") == ""
        with pytest.raises(ValueError):
            wb.get_cell_value("missing", "A1")
        with pytest.raises(ValueError):
            wb.get_cell_value("first", "1A")
        with pytest.raises(ValueError):
            wb.get_sheet_index("bad/name")


def test_parse_users():
    rows = [
        ["user_id", "nickname", "phone_number", "ignored"],
        ["u1", "Alice", "5550100", "x"],
        ["u2", "Bob", "", "y"],
        ["", "", "", ""],
        ["u3", "Carol", "", ""],
    ]
    data = _make_xlsx({"user": rows})
    [users] = xlsx.parse_all(data, User)
    assert users == [
        User(user_id="u1", nickname="Alice", phone_number="5550100"),
        User(user_id="u2", nickname="Bob"),
    ]


def test_parse_typed_model_with_shared_strings():
    rows = [
        ["name", "points", "small", "active", "ratio", "note"],
        ["alice", "10", "-5", "t", "1.5", "x"],
        ["bob", 7, "", "0", "", ""],
    ]
    data = _make_xlsx({"Score": rows}, shared=True)
    with xlsx.open_workbook(data) as wb:
        scores = xlsx.parse_sheet(wb, Score)
    assert scores == [
        Score(name="alice", points=10, small=-5, active=True, ratio=1.5),
        Score(name="bob", points=7, small=0, active=False, ratio=0.0),
    ]
    assert all(score.note == "keep" for score in scores)


def test_parse_value_out_of_range():
    data = _make_xlsx({"Score": [["name", "small"], ["a", "200"]]})
    with pytest.raises(ValueError):
        xlsx.parse_all(data, Score)


def test_missing_sheet_gives_empty_list():
    data = _make_xlsx({"other": [["a"]]})
    assert xlsx.parse_all(data, User, Score) == [[], []]


def test_no_matching_header():
    data = _make_xlsx({"user": [["unknown"], ["x"]]})
    with pytest.raises(ValueError, match="sheet column empty"):
        xlsx.parse_all(data, User)


def test_model_without_columns():
    data = _make_xlsx({"Hidden": [["secret_note"]]})
    with pytest.raises(ValueError, match="empty column struct"):
        xlsx.parse_all(data, Hidden)


def test_parse_non_dataclass():
    data = _make_xlsx({"user": [["user_id"]]})
    with xlsx.open_workbook(data) as wb:
        with pytest.raises(TypeError):
            xlsx.parse_sheet(wb, dict)


def test_parse_all_requires_models():
    with pytest.raises(ValueError, match="empty models"):
        xlsx.parse_all(_make_xlsx({"user": []}))
"""Reading rows of spreadsheet workbooks into dataclass records."""

import dataclasses
import enum
import io
import itertools
import math
import posixpath
import re
import struct
import typing
import xml.etree.ElementTree as ET
import zipfile
from typing import Annotated, Any, BinaryIO, Optional, Union

_COLUMN_KEY = "column"
_MAX_COLUMNS = 16384
_MAX_ROWS = 1048576
_AXIS_RE = re.compile(r"([A-Za-z]+)([1-9][0-9]*)")
_INT_RE = re.compile(r"[+-]?[0-9]+")
_UINT_RE = re.compile(r"[0-9]+")
_ANNOTATED_RE = re.compile(r"(?:typing\.)?Annotated\[\s*(\w+)\s*,\s*(?:\w+\.)?Kind\.(\w+)\s*\]")
_BAD_SHEET_CHARS = set(':\\/?*[]')


class Kind(enum.Enum):
    """Value kinds a cell can be converted to."""

    BOOL = "bool"
    INT = "int"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT = "uint"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    STRING = "string"


_INT_BITS = {Kind.INT: 64, Kind.INT8: 8, Kind.INT16: 16, Kind.INT32: 32, Kind.INT64: 64}
_UINT_BITS = {Kind.UINT: 64, Kind.UINT8: 8, Kind.UINT16: 16, Kind.UINT32: 32, Kind.UINT64: 64}
_PLAIN_KINDS = {bool: Kind.BOOL, int: Kind.INT, float: Kind.FLOAT64, str: Kind.STRING}
_PLAIN_NAMES = {"bool": bool, "int": int, "float": float, "str": str}


def column(name: str) -> dict:
    """Return dataclass field metadata naming the sheet column; "-" skips the field."""
    return {_COLUMN_KEY: name}


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _children(elem: ET.Element, name: str):
    return (child for child in elem if _local(child.tag) == name)


def _rich_text(elem: ET.Element) -> str:
    parts = []
    for child in elem:
        kind = _local(child.tag)
        if kind == "t":
            parts.append(child.text or "")
        elif kind == "r":
            parts.extend(t.text or "" for t in _children(child, "t"))
    return "".join(parts)


def _az_to_num(letters: str) -> int:
    number = 0
    for ch in letters.upper():
        number = number * 26 + ord(ch) - ord("A") + 1
    return number


def _split_axis(axis: str) -> "tuple[str, int]":
    match = _AXIS_RE.fullmatch(axis)
    if not match:
        raise ValueError(f'cannot convert cell "{axis}" to coordinates: invalid cell name')
    letters, row = match.group(1).upper(), int(match.group(2))
    if _az_to_num(letters) > _MAX_COLUMNS:
        raise ValueError(f'the column number must be less than or equal to {_MAX_COLUMNS}')
    if row > _MAX_ROWS:
        raise ValueError(f'row number exceeds maximum limit {_MAX_ROWS}')
    return letters, row


def _check_sheet_name(name: str) -> None:
    if name == "":
        raise ValueError("the sheet name can not be blank")
    if len(name) > 31:
        raise ValueError("the sheet name length exceeds the 31 characters limit")
    if name.startswith("'") or name.endswith("'"):
        raise ValueError("the first or last character of the sheet name can not be a single quote")
    if _BAD_SHEET_CHARS & set(name):
        raise ValueError("the sheet can not contain any of the characters :\\/?*[or]")


class Workbook:
    """A read-only view of the cells of a workbook file."""

    def __init__(self, source: Union[bytes, BinaryIO]):
        data = bytes(source) if isinstance(source, (bytes, bytearray)) else source.read()
        self._zip = zipfile.ZipFile(io.BytesIO(data))
        self._shared = self._read_shared_strings()
        self._sheets = self._read_sheets()
        self._cells: "dict[str, dict[str, str]]" = {}

    def __enter__(self) -> "Workbook":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _read_xml(self, path: str) -> Optional[ET.Element]:
        try:
            data = self._zip.read(path)
        except KeyError:
            return None
        return ET.fromstring(data)

    def _read_shared_strings(self) -> "list[str]":
        root = self._read_xml("xl/sharedStrings.xml")
        if root is None:
            return []
        return [_rich_text(si) for si in _children(root, "si")]

    def _read_sheets(self) -> "list[tuple[str, str]]":
        root = self._read_xml("xl/workbook.xml")
        if root is None:
            raise ValueError("workbook part is missing")
        rels_root = self._read_xml("xl/_rels/workbook.xml.rels")
        targets = {}
        if rels_root is not None:
            targets = {rel.get("Id"): rel.get("Target", "") for rel in _children(rels_root, "Relationship")}
        sheets = []
        for elem in root.iter():
            if _local(elem.tag) != "sheet":
                continue
            rel_id = next((v for k, v in elem.attrib.items() if k.endswith("}id") or k == "id"), None)
            target = targets.get(rel_id, "")
            if target.startswith("/"):
                path = target.lstrip("/")
            else:
                path = posixpath.normpath(posixpath.join("xl", target))
            sheets.append((elem.get("name", ""), path))
        return sheets

    def _cell_text(self, cell: ET.Element) -> str:
        cell_type = cell.get("t", "n")
        value_elem = next(_children(cell, "v"), None)
        value = value_elem.text if value_elem is not None and value_elem.text is not None else ""
        if cell_type == "s":
            return self._shared[int(value)] if value else ""
        if cell_type == "inlineStr":
            inline = next(_children(cell, "is"), None)
            return _rich_text(inline) if inline is not None else value
        if cell_type == "b":
            return "TRUE" if value == "1" else "FALSE"
        return value

    def _load_sheet(self, path: str) -> "dict[str, str]":
        cells: "dict[str, str]" = {}
        root = self._read_xml(path)
        if root is None:
            return cells
        row_num = 0
        for row in (e for e in root.iter() if _local(e.tag) == "row"):
            row_num = int(row.get("r")) if row.get("r") else row_num + 1
            col_num = 0
            for cell in _children(row, "c"):
                ref = cell.get("r")
                col_num = _az_to_num(_split_axis(ref)[0]) if ref else col_num + 1
                cells[f"{num_to_az(col_num)}{row_num}"] = self._cell_text(cell)
        return cells

    def get_sheet_index(self, name: str) -> int:
        """Return the position of the named sheet, or -1 when there is none."""
        _check_sheet_name(name)
        wanted = name.lower()
        return next((index for index, (sheet, _) in enumerate(self._sheets) if sheet.lower() == wanted), -1)

    def get_cell_value(self, sheet: str, axis: str) -> str:
        """Return the text of a cell such as "B3"; empty when the cell is blank."""
        index = self.get_sheet_index(sheet)
        if index < 0:
            raise ValueError(f"sheet {sheet} does not exist")
        letters, row = _split_axis(axis)
        path = self._sheets[index][1]
        if path not in self._cells:
            self._cells[path] = self._load_sheet(path)
        return self._cells[path].get(f"{letters}{row}", "")

    def close(self) -> None:
        self._zip.close()


def open_workbook(stream: Union[bytes, BinaryIO]) -> Workbook:
    """Open a workbook from bytes or a binary stream."""
    return Workbook(stream)


def num_to_az(num: int) -> str:
    """Return the column letters of a 1-based column number."""
    if num < 0:
        raise ValueError(f"column number {num} is negative")
    letters = []
    while num > 0:
        num, rem = divmod(num - 1, 26)
        letters.append(chr(ord("A") + rem))
    return "".join(reversed(letters))


def get_axis(x: int, y: int) -> str:
    """Return the cell name of column x and row y."""
    return f"{num_to_az(x)}{y}"


def _parse_int(s: str, bits: int) -> int:
    if not _INT_RE.fullmatch(s):
        raise ValueError(f'strconv.ParseInt: parsing "{s}": invalid syntax')
    value = int(s)
    if not -(1 << (bits - 1)) <= value < (1 << (bits - 1)):
        raise ValueError(f'strconv.ParseInt: parsing "{s}": value out of range')
    return value


def _parse_uint(s: str, bits: int) -> int:
    if not _UINT_RE.fullmatch(s):
        raise ValueError(f'strconv.ParseUint: parsing "{s}": invalid syntax')
    value = int(s)
    if value >= 1 << bits:
        raise ValueError(f'strconv.ParseUint: parsing "{s}": value out of range')
    return value


def _parse_float(s: str, bits: int) -> float:
    syntax = ValueError(f'strconv.ParseFloat: parsing "{s}": invalid syntax')
    if "_" in s or s != s.strip():
        raise syntax
    body = s.lstrip("+-").lower()
    try:
        value = float.fromhex(s) if body.startswith("0x") else float(s)
    except ValueError:
        raise syntax from None
    out_of_range = ValueError(f'strconv.ParseFloat: parsing "{s}": value out of range')
    if math.isinf(value) and body not in ("inf", "infinity"):
        raise out_of_range
    if bits == 32:
        try:
            value = struct.unpack("<f", struct.pack("<f", value))[0]
        except OverflowError:
            raise out_of_range from None
    return value


def string_to_value(s: str, kind: Kind) -> Any:
    """Convert cell text to a value of the given kind; empty text gives the zero value."""
    if s == "":
        return zero_value(kind)
    if kind is Kind.BOOL:
        lowered = s.lower()
        if lowered in ("false", "f", "0"):
            return False
        if lowered in ("true", "t", "1"):
            return True
        raise ValueError(f"parse {s} to bool error")
    if kind in _INT_BITS:
        return _parse_int(s, _INT_BITS[kind])
    if kind in _UINT_BITS:
        return _parse_uint(s, _UINT_BITS[kind])
    if kind is Kind.FLOAT32:
        return _parse_float(s, 32)
    if kind is Kind.FLOAT64:
        return _parse_float(s, 64)
    if kind is Kind.STRING:
        return s
    raise TypeError(f"not Supported {kind}")


def zero_value(kind: Kind) -> Any:
    """Return the zero value of a kind."""
    if kind is Kind.BOOL:
        return False
    if kind in _INT_BITS or kind in _UINT_BITS:
        return 0
    if kind in (Kind.FLOAT32, Kind.FLOAT64):
        return 0.0
    if kind is Kind.STRING:
        return ""
    raise TypeError(f"not Supported {kind}")


def _field_kind(hint: Any) -> Kind:
    if isinstance(hint, str):
        text = hint.strip()
        match = _ANNOTATED_RE.fullmatch(text)
        if match:
            try:
                return Kind[match.group(2)]
            except KeyError:
                raise TypeError(f"not Supported {hint!r}") from None
        hint = _PLAIN_NAMES.get(text, hint)
    if typing.get_origin(hint) is Annotated:
        base, *extras = typing.get_args(hint)
        found = next((extra for extra in extras if isinstance(extra, Kind)), None)
        if found is not None:
            return found
        hint = base
    kind = _PLAIN_KINDS.get(hint)
    if kind is None:
        raise TypeError(f"not Supported {hint!r}")
    return kind


def _is_model(cls: Any) -> bool:
    return isinstance(cls, type) and dataclasses.is_dataclass(cls)


def _new_item(model: type, values: "dict[str, Any]") -> Any:
    kwargs = dict(values)
    for f in dataclasses.fields(model):
        if not f.init or f.name in kwargs:
            continue
        if f.default is not dataclasses.MISSING or f.default_factory is not dataclasses.MISSING:
            continue
        kwargs[f.name] = zero_value(_field_kind(f.type))
    return model(**kwargs)


def get_sheet_name(model: Any) -> str:
    """Return the sheet a record type reads from, or "" when it is not a record type."""
    target = model
    if isinstance(target, (list, tuple)):
        if not target:
            return ""
        target = target[0]
    cls = target if isinstance(target, type) else type(target)
    if not _is_model(cls):
        return ""
    if callable(getattr(cls, "sheet_name", None)):
        instance = _new_item(cls, {}) if isinstance(target, type) else target
        return instance.sheet_name()
    return cls.__name__


def parse_sheet(workbook: Workbook, model: type) -> list:
    """Read the records of a dataclass type from its sheet; [] when the sheet is absent."""
    if not _is_model(model):
        raise TypeError("not struct")
    sheet = get_sheet_name(model)
    if workbook.get_sheet_index(sheet) < 0:
        return []
    columns: "dict[str, tuple[str, Any]]" = {}
    for f in dataclasses.fields(model):
        alias = f.metadata.get(_COLUMN_KEY, "")
        if alias == "-":
            continue
        columns[alias or f.name] = (f.name, f.type)
    if not columns:
        raise ValueError("empty column struct")

    positions: "dict[str, int]" = {}
    for x in itertools.count(1):
        name = workbook.get_cell_value(sheet, get_axis(x, 1))
        if name == "":
            break
        if name in columns:
            positions[name] = x
    if not positions:
        raise ValueError("sheet column empty")

    records = []
    for y in itertools.count(2):
        values = {}
        for name, x in positions.items():
            text = workbook.get_cell_value(sheet, get_axis(x, y))
            if text == "":
                continue
            field_name, hint = columns[name]
            values[field_name] = string_to_value(text, _field_kind(hint))
        if not values:
            break
        records.append(_new_item(model, values))
    return records


def parse_all(stream: Union[bytes, BinaryIO], *models: type) -> "list[list]":
    """Read the records of each model from one workbook, in the order given."""
    if not models:
        raise ValueError("empty models")
    with open_workbook(stream) as workbook:
        return [parse_sheet(workbook, model) for model in models]


@dataclasses.dataclass
class User:
    """A user row of an import sheet."""

    user_id: str = dataclasses.field(default="", metadata=column("user_id"))
    nickname: str = dataclasses.field(default="", metadata=column("nickname"))
    face_url: str = dataclasses.field(default="", metadata=column("face_url"))
    birth: str = dataclasses.field(default="", metadata=column("birth"))
    gender: str = dataclasses.field(default="", metadata=column("gender"))
    area_code: str = dataclasses.field(default="", metadata=column("area_code"))
    phone_number: str = dataclasses.field(default="", metadata=column("phone_number"))
    email: str = dataclasses.field(default="", metadata=column("email"))
    account: str = dataclasses.field(default="", metadata=column("account"))
    password: str = dataclasses.field(default="", metadata=column("password"), repr=False)

    def sheet_name(self) -> str:
        return "user"
"""
Tests for job number, drawing number and change order identifier parsing.
"""

import pytest

from assetnav.identifiers import (
    extract_job_number, normalize_drawing_number, extract_drawing_number_from_filename,
    derive_co_number, format_change_order_id, sequential_number
)


@pytest.mark.parametrize("name, expected", [
    ("U2524_Valley View", "U2524"),
    ("U2524", "U2524"),
    ("PRO 042_U2524_Valley View", "U2524"),
    ("PRO042-U2961_Pump Station", "U2961"),
    ("PRO-2025-003", "PRO-2025-003"),
    ("PRO-2025-003_Industrial Facility", "PRO-2025-003"),
    ("Unrelated Folder", None),
    ("Project U2524", None),
    ("", None),
    (None, None),
    (2524, None),
])
def test_extract_job_number(name, expected):
    assert extract_job_number(name) == expected


def test_extract_job_number_prefers_leading_u_token():
    # A leading U number wins over a later PRO pattern
    assert extract_job_number("U1000_PRO 042_U2524") == "U1000"


@pytest.mark.parametrize("text, expected", [
    ("r1", "R-1"),
    ("R1", "R-1"),
    ("R-3A", "R-3A"),
    ("r-12b", "R-12B"),
    ("please send r-7 again", "R-7"),
    ("what about R12 and R-13?", "R-12"),
    ("no drawing here", None),
    ("", None),
    (None, None),
])
def test_normalize_drawing_number(text, expected):
    assert normalize_drawing_number(text) == expected


def test_normalize_drawing_number_is_stable():
    once = normalize_drawing_number("r5c")
    assert normalize_drawing_number(once) == once


@pytest.mark.parametrize("filename, url, expected", [
    ("U2961_R-1_APP 00_Layout.pdf", "", "R-1"),
    ("U2961-r-22b.pdf", "", "R-22B"),
    ("layout.pdf", "/assets/U2961/05 Approval Drawings/U2961_R-4_APP 01.pdf", "R-4"),
    ("layout.pdf", "/assets/U2961/layout.pdf", None),
])
def test_extract_drawing_number_from_filename(filename, url, expected):
    assert extract_drawing_number_from_filename(filename, url) == expected


class TestChangeOrderNumbers:
    """Change order id parsing and formatting."""

    @pytest.mark.parametrize("change_order_id, job, expected", [
        ("U2524 - CO #007", "U2524", "007"),
        ("u2524 - co #012", "U2524", "012"),
        ("U2524-CO#3", "U2524", "3"),
        ("CO #004", "U2524", "004"),
        ("CO#5", None, "5"),
        ("009", "U2524", "009"),
        ("U2524 - CO #", "U2524", "001"),
        ("", "U2524", "001"),
        (None, "U2524", "001"),
    ])
    def test_derive_co_number(self, change_order_id, job, expected):
        assert derive_co_number(change_order_id, job) == expected

    def test_derive_co_number_escapes_job_number(self):
        # Regex metacharacters in job numbers are matched literally
        assert derive_co_number("PRO.1 - CO #002", "PRO.1") == "002"
        assert derive_co_number("PROX1 - CO #002", "PRO.1") == "PROX1 - CO #002"

    @pytest.mark.parametrize("raw, index, expected", [
        ("U2961_CO#001", 0, "U2961 - CO #001"),
        ("CO#12", 0, "U2961 - CO #012"),
        ("U2961_7", 0, "U2961 - CO #007"),
        ("4", 0, "U2961 - CO #004"),
        ("", 2, "U2961 - CO #003"),
        ("misc", 0, "U2961 - CO #001"),
    ])
    def test_format_change_order_id(self, raw, index, expected):
        assert format_change_order_id("U2961", raw, index) == expected

    def test_sequential_number(self):
        assert sequential_number(0) == "101"
        assert sequential_number(11) == "112"

# tests/conftest.py
"""Shared record tables for the test suite."""

import os

import pytest

from analytics.record_source import load_records, parse_records

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

SCENARIO_CSV = """Name,Platform,Year,Genre,Publisher,NA_Sales,EU_Sales,JP_Sales,Other_Sales,Global_Sales
Alpha,Wii,2008,Sports,Nintendo,4,3,1,1,10
Bravo,DS,2008,Puzzle,Nintendo,2,1,1,0.5,5
Charlie,Wii,2009,Sports,Sega,1,1,0.5,0.25,3
"""

# Absent year / platform / sales cells and a tie on Global_Sales
MESSY_CSV = """Name,Platform,Year,Genre,Publisher,NA_Sales,EU_Sales,JP_Sales,Other_Sales,Global_Sales
Alpha,Wii,2008,Sports,Nintendo,4,3,1,1,10
Bravo,DS,N/A,Puzzle,Nintendo,2,1,1,0.5,5
Charlie,,2008,Sports,Sega,1,,0.5,0.25,5
Delta,PS2,2004,Action,Take-Two,abc,0.4,0.41,10.57,
Echo,Wii,2008,,Nintendo,0.5,0.5,0.5,0.5,2
"""


@pytest.fixture
def scenario_records():
    return parse_records(SCENARIO_CSV, debug=False)


@pytest.fixture
def messy_records():
    return parse_records(MESSY_CSV, debug=False)


@pytest.fixture
def sample_records():
    return load_records(os.path.join(ROOT_DIR, "data", "vgsales.csv"), debug=False)

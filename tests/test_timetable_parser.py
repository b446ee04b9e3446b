"""Tests for the DB Timetables XML parser."""

from datetime import UTC, date, datetime

import pytest

from smart_train_finder.adapters.db_timetables import TimetableParser
from smart_train_finder.domain.exceptions import TimetableParseError

PLAN_XML = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<timetable station="Hamburg Hbf">
  <s id="-5356212398776629018-2506071404-3">
    <tl f="F" t="p" o="80" c="ICE" n="1001"/>
    <ar pt="2506071026" pp="13" l="" ppth="Kiel Hbf|Neumünster"/>
    <dp pt="2506071034" pp="13" ppth="Bremen Hbf|Osnabrück Hbf|Münster(Westf)Hbf"/>
  </s>
  <s id="7720045436918213551-2506071050-1">
    <tl f="N" t="p" o="800292" c="RE" n="21037"/>
    <dp pt="2506071050" pp="5" ppth="Harburg||Buchholz(Nordheide)"/>
  </s>
  <s id="-1234-2506071055-12">
    <tl f="F" t="p" o="80" c="IC" n="2200"/>
    <ar pt="2506071055" pp="7" ppth="Berlin Hbf"/>
  </s>
</timetable>
"""

STATIONS_XML = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<stations>
  <station p="1|2" meta="8098549" name="Hamburg Hbf (S-Bahn)" eva="8098549" ds100="AHS"/>
  <station p="1|2|3" meta="8098549" name="Hamburg Hbf" eva="8002549" ds100="AH"/>
  <station name="Broken entry"/>
</stations>
"""


class TestParseTimetable:
    """Tests for TimetableParser.parse_timetable."""

    @pytest.fixture
    def slot(self):
        return TimetableParser.parse_timetable(PLAN_XML, "8002549", date(2025, 6, 7), 10)

    def test_slot_metadata(self, slot) -> None:
        """Given a plan document, when parsing, then the requested key is kept."""
        assert slot.station_id == "8002549"
        assert slot.civil_date == date(2025, 6, 7)
        assert slot.hour == 10
        assert len(slot.stop_events) == 3

    def test_stop_event_with_arrival_and_departure(self, slot) -> None:
        """Given a through train, when parsing, then all fields are extracted."""
        event = slot.stop_events[0]

        assert event.train_id == "5356212398776629018"
        assert event.category == "ICE"
        assert event.arrival == datetime(2025, 6, 7, 8, 26, tzinfo=UTC)
        assert event.departure == datetime(2025, 6, 7, 8, 34, tzinfo=UTC)
        assert event.planned_path == ("Bremen Hbf", "Osnabrück Hbf", "Münster(Westf)Hbf")

    def test_departure_only_event_drops_empty_path_entries(self, slot) -> None:
        """Given a starting train with an empty path entry, when parsing, then it is skipped."""
        event = slot.stop_events[1]

        assert event.train_id == "7720045436918213551"
        assert event.arrival is None
        assert event.planned_path == ("Harburg", "Buchholz(Nordheide)")

    def test_arrival_only_event_has_no_path(self, slot) -> None:
        """Given a terminating train, when parsing, then departure and path are empty."""
        event = slot.stop_events[2]

        assert event.departure is None
        assert event.planned_path == ()
        assert event.arrival == datetime(2025, 6, 7, 8, 55, tzinfo=UTC)

    def test_find_train_returns_event_by_id(self, slot) -> None:
        """Given a parsed slot, when looking up a train, then its event is returned."""
        assert slot.find_train("1234") is slot.stop_events[2]
        assert slot.contains_train("999") is False

    def test_empty_timetable(self) -> None:
        """Given a timetable without stops, when parsing, then the slot is empty."""
        slot = TimetableParser.parse_timetable(
            '<timetable station="Utrecht Centraal"/>', "8400621", date(2025, 6, 7), 3
        )

        assert slot.stop_events == ()

    def test_invalid_xml_raises(self) -> None:
        """Given broken XML, when parsing, then TimetableParseError is raised."""
        with pytest.raises(TimetableParseError, match="Invalid XML"):
            TimetableParser.parse_timetable("<timetable", "8002549", date(2025, 6, 7), 10)

    def test_unexpected_root_raises(self) -> None:
        """Given a station document, when parsing as a timetable, then it is rejected."""
        with pytest.raises(TimetableParseError, match="Expected <timetable>"):
            TimetableParser.parse_timetable(STATIONS_XML, "8002549", date(2025, 6, 7), 10)


class TestParseStations:
    """Tests for TimetableParser.parse_stations."""

    def test_candidates_in_document_order(self) -> None:
        """Given a station lookup, when parsing, then complete candidates are returned in order."""
        stations = TimetableParser.parse_stations(STATIONS_XML)

        assert [(s.id, s.name) for s in stations] == [
            ("8098549", "Hamburg Hbf (S-Bahn)"),
            ("8002549", "Hamburg Hbf"),
        ]

    def test_empty_station_list(self) -> None:
        """Given no matches, when parsing, then the list is empty."""
        assert TimetableParser.parse_stations("<stations/>") == []


class TestExtractTrainId:
    """Tests for TimetableParser.extract_train_id."""

    @pytest.mark.parametrize(
        ("raw_id", "expected"),
        [
            ("-5356212398776629018-2506071404-3", "5356212398776629018"),
            ("7720045436918213551-2506071050-1", "7720045436918213551"),
            ("no-digits", "no-digits"),
        ],
    )
    def test_extracts_run_id(self, raw_id: str, expected: str) -> None:
        """Given a provider stop id, when extracting, then the run id is returned."""
        assert TimetableParser.extract_train_id(raw_id) == expected

"""Parser for DB Timetables API XML documents."""

import re
import xml.etree.ElementTree as ET
from datetime import date
from zoneinfo import ZoneInfo

from smart_train_finder.adapters.db_timetables.constants import PLANNED_PATH_SEPARATOR
from smart_train_finder.domain.exceptions import TimetableParseError
from smart_train_finder.domain.models.station import Station
from smart_train_finder.domain.models.stop_event import StopEvent
from smart_train_finder.domain.models.timetable_slot import TimetableSlot
from smart_train_finder.domain.timetable_time import PROVIDER_TIMEZONE, parse_provider_timestamp

# Stop ids look like "-5356212398776629018-2506071404-3"; the run id is the
# first number enclosed by dashes.
TRAIN_ID_PATTERN = re.compile(r"-?(\d+)-")


class TimetableParser:
    """Parses plan and station documents into domain objects."""

    @staticmethod
    def parse_timetable(
        xml_text: str,
        station_id: str,
        civil_date: date,
        hour: int,
        timezone: ZoneInfo = PROVIDER_TIMEZONE,
    ) -> TimetableSlot:
        """Parse a ``/plan`` document.

        Args:
            xml_text: Raw XML returned by the plan endpoint.
            station_id: EVA number the document was requested for.
            civil_date: Civil date the document was requested for.
            hour: Civil hour the document was requested for.
            timezone: Provider timezone of the timestamps.

        Returns:
            TimetableSlot with stop events in document order.

        Raises:
            TimetableParseError: If the document is not a timetable.
        """
        root = TimetableParser._parse_root(xml_text, "timetable")
        stop_events = tuple(
            TimetableParser._parse_stop_event(element, timezone) for element in root.iter("s")
        )
        return TimetableSlot(
            station_id=station_id,
            civil_date=civil_date,
            hour=hour,
            stop_events=stop_events,
        )

    @staticmethod
    def parse_stations(xml_text: str) -> list[Station]:
        """Parse a ``/station`` lookup document into candidate stations.

        Raises:
            TimetableParseError: If the document is not a station list.
        """
        root = TimetableParser._parse_root(xml_text, "stations")
        stations = []
        for element in root.iter("station"):
            name = element.get("name")
            eva = element.get("eva")
            if name and eva:
                stations.append(Station(id=eva, name=name))
        return stations

    @staticmethod
    def extract_train_id(raw_id: str) -> str:
        """Extract the numeric run id from a provider stop id."""
        match = TRAIN_ID_PATTERN.search(raw_id)
        return match.group(1) if match else raw_id

    @staticmethod
    def _parse_root(xml_text: str, expected_tag: str) -> ET.Element:
        try:
            root = ET.fromstring(xml_text)
        except ET.ParseError as e:
            raise TimetableParseError(f"Invalid XML document: {e}") from e

        if root.tag != expected_tag:
            raise TimetableParseError(f"Expected <{expected_tag}> document, got <{root.tag}>")
        return root

    @staticmethod
    def _parse_stop_event(element: ET.Element, timezone: ZoneInfo) -> StopEvent:
        train_id = TimetableParser.extract_train_id(element.get("id", ""))

        trip_label = element.find("tl")
        category = trip_label.get("c") if trip_label is not None else None

        arrival_element = element.find("ar")
        arrival = (
            parse_provider_timestamp(arrival_element.get("pt"), timezone)
            if arrival_element is not None
            else None
        )

        departure_element = element.find("dp")
        departure = None
        planned_path: tuple[str, ...] = ()
        if departure_element is not None:
            departure = parse_provider_timestamp(departure_element.get("pt"), timezone)
            planned_path = TimetableParser._split_path(departure_element.get("ppth", ""))

        return StopEvent(
            train_id=train_id,
            category=category or None,
            arrival=arrival,
            departure=departure,
            planned_path=planned_path,
        )

    @staticmethod
    def _split_path(ppth: str) -> tuple[str, ...]:
        """Split a planned path into station names, dropping empty entries."""
        return tuple(name for name in ppth.split(PLANNED_PATH_SEPARATOR) if name)

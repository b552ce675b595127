"""Form payloads submitted by the web client."""
from datetime import datetime
from typing import Annotated

from backend.schema.validation import Payload, day, required, text


class ReportForm(Payload):
    report_type: Annotated[str, text("Report type is required")] = required()
    period: Annotated[str, text("Period is required")] = required()
    gym: Annotated[str, text("Gym is required")] = required()


class SearchForm(Payload):
    type_of_sport: Annotated[str, text("Type of sport is required")] = required()
    date: Annotated[datetime, day("Date is required")] = required()
    time: Annotated[str, text("Time is required")] = required()
    coach: Annotated[str, text("Coach is required")] = required()

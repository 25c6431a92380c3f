"""Shared pt-BR formatting helpers for documents and emails"""

import re
from datetime import date, datetime
from typing import Optional, Union
from zoneinfo import ZoneInfo

from ..config import DISPLAY_TIMEZONE


def format_currency(value: Optional[float]) -> str:
    """Format a money amount as ``R$ 1234.50`` (two decimals, no grouping)"""
    return f"R$ {float(value or 0):.2f}"


def to_display_time(value: datetime) -> datetime:
    """Convert aware datetimes to the display timezone; naive values are kept"""
    if value.tzinfo is None:
        return value
    return value.astimezone(ZoneInfo(DISPLAY_TIMEZONE))


def format_date_br(value: Union[date, datetime]) -> str:
    """dd/mm/yyyy"""
    if isinstance(value, datetime):
        value = to_display_time(value)
    return value.strftime("%d/%m/%Y")


def format_datetime_br(value: datetime) -> str:
    """dd/mm/yyyy HH:MM"""
    return to_display_time(value).strftime("%d/%m/%Y %H:%M")


def slugify_client_name(name: str) -> str:
    """Lowercase the name and collapse each whitespace run into a hyphen"""
    return re.sub(r"\s+", "-", name).lower()


def whatsapp_link(phone: Optional[str]) -> Optional[str]:
    """Build a wa.me deep link from a phone number, keeping only its digits"""
    digits = re.sub(r"\D", "", phone or "")
    if not digits:
        return None
    return f"https://wa.me/{digits}"

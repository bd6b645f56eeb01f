"""
Utilitários de data/hora: carimbos ISO em UTC e formatos pt-BR.
"""
from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone
from typing import Optional

# strptime aceita "2026-1-5"; o formato exige dois dígitos em mês e dia
ISO_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(dt: datetime) -> str:
    return dt.strftime("%Y-%m-%dT%H:%M:%SZ")


def now_iso() -> str:
    return to_iso(now_utc())


def shifted_iso(dt: datetime, hours: int) -> str:
    return to_iso(dt + timedelta(hours=hours))


def parse_iso_date(value: str) -> date:
    """Converte 'YYYY-MM-DD' em `date` (ValueError se inválida)."""
    if not ISO_DATE_RE.fullmatch(value):
        raise ValueError(f"data fora do formato AAAA-MM-DD: {value!r}")
    return datetime.strptime(value, "%Y-%m-%d").date()


def format_date_br(value: str | date) -> str:
    """'2026-10-18' -> '18/10/2026'."""
    d = parse_iso_date(value) if isinstance(value, str) else value
    return d.strftime("%d/%m/%Y")


def time_to_minutes(value: Optional[str]) -> Optional[int]:
    """'HH:MM' ou 'HH:MM:SS' -> minutos desde 00:00; None se ilegível."""
    if not value:
        return None
    parts = value.split(":")
    if len(parts) < 2:
        return None
    try:
        hours, minutes = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    return hours * 60 + minutes

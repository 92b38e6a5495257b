"""Bundled holiday snapshot.

Generated by ``scripts/generate_static_data.py`` from BrasilAPI; only the block
between the markers is rewritten.
"""

from types import MappingProxyType
from typing import Mapping

from br_holiday.schemas.holiday import Holiday

# --- BEGIN GENERATED HOLIDAYS ---
_RAW_HOLIDAYS = {
    2025: [
        {"date": "2025-01-01", "name": "Confraternização mundial", "type": "national"},
        {"date": "2025-03-04", "name": "Carnaval", "type": "national"},
        {"date": "2025-04-18", "name": "Sexta-feira Santa", "type": "national"},
        {"date": "2025-04-20", "name": "Páscoa", "type": "national"},
        {"date": "2025-04-21", "name": "Tiradentes", "type": "national"},
        {"date": "2025-05-01", "name": "Dia do trabalho", "type": "national"},
        {"date": "2025-06-19", "name": "Corpus Christi", "type": "national"},
        {"date": "2025-09-07", "name": "Independência do Brasil", "type": "national"},
        {"date": "2025-10-12", "name": "Nossa Senhora Aparecida", "type": "national"},
        {"date": "2025-11-02", "name": "Finados", "type": "national"},
        {"date": "2025-11-15", "name": "Proclamação da República", "type": "national"},
        {"date": "2025-11-20", "name": "Dia da consciência negra", "type": "national"},
        {"date": "2025-12-25", "name": "Natal", "type": "national"},
    ],
    2026: [
        {"date": "2026-01-01", "name": "Confraternização mundial", "type": "national"},
        {"date": "2026-02-17", "name": "Carnaval", "type": "national"},
        {"date": "2026-04-03", "name": "Sexta-feira Santa", "type": "national"},
        {"date": "2026-04-05", "name": "Páscoa", "type": "national"},
        {"date": "2026-04-21", "name": "Tiradentes", "type": "national"},
        {"date": "2026-05-01", "name": "Dia do trabalho", "type": "national"},
        {"date": "2026-06-04", "name": "Corpus Christi", "type": "national"},
        {"date": "2026-09-07", "name": "Independência do Brasil", "type": "national"},
        {"date": "2026-10-12", "name": "Nossa Senhora Aparecida", "type": "national"},
        {"date": "2026-11-02", "name": "Finados", "type": "national"},
        {"date": "2026-11-15", "name": "Proclamação da República", "type": "national"},
        {"date": "2026-11-20", "name": "Dia da consciência negra", "type": "national"},
        {"date": "2026-12-25", "name": "Natal", "type": "national"},
    ],
    2027: [
        {"date": "2027-01-01", "name": "Confraternização mundial", "type": "national"},
        {"date": "2027-02-09", "name": "Carnaval", "type": "national"},
        {"date": "2027-03-26", "name": "Sexta-feira Santa", "type": "national"},
        {"date": "2027-03-28", "name": "Páscoa", "type": "national"},
        {"date": "2027-04-21", "name": "Tiradentes", "type": "national"},
        {"date": "2027-05-01", "name": "Dia do trabalho", "type": "national"},
        {"date": "2027-05-27", "name": "Corpus Christi", "type": "national"},
        {"date": "2027-09-07", "name": "Independência do Brasil", "type": "national"},
        {"date": "2027-10-12", "name": "Nossa Senhora Aparecida", "type": "national"},
        {"date": "2027-11-02", "name": "Finados", "type": "national"},
        {"date": "2027-11-15", "name": "Proclamação da República", "type": "national"},
        {"date": "2027-11-20", "name": "Dia da consciência negra", "type": "national"},
        {"date": "2027-12-25", "name": "Natal", "type": "national"},
    ],
}
# --- END GENERATED HOLIDAYS ---


def build_static_table(raw: Mapping[int, list[dict]]) -> Mapping[int, tuple[Holiday, ...]]:
    """Freeze a year -> records mapping into a read-only table of holidays."""
    return MappingProxyType(
        {
            int(year): tuple(Holiday(**record) for record in records)
            for year, records in raw.items()
        }
    )


STATIC_HOLIDAYS = build_static_table(_RAW_HOLIDAYS)

"""
Calendar date helpers shared by the exercise log.

Exercise dates are kept as plain calendar dates.  Incoming text is
parsed leniently (see ``parse_date`` for the accepted forms) and
outgoing dates are rendered as ``"Www Mmm dd yyyy"``, e.g.
``"Mon Jan 01 2024"``.  Weekday and month names are fixed English
abbreviations so the output does not depend on the process locale.
"""

from datetime import date, datetime
from typing import Optional


_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

# Extra free‑form layouts accepted after the ISO and display forms.
_FORMATS = (
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%b %d %Y",
    "%d %B %Y",
    "%d %b %Y",
)


def today() -> date:
    """Return the current local date."""
    return date.today()


def parse_date(text: Optional[str]) -> Optional[date]:
    """Parse ``text`` into a calendar date or return ``None``.

    Accepted forms:

    * ``2023-03-15``
    * ``2023-03-15T10:30:00`` with an optional ``Z`` or UTC offset; only
      the calendar date part is kept
    * ``Wed Mar 15 2023`` (the display form produced by ``format_date``)
    * ``2023/03/15`` and ``03/15/2023`` (month before day)
    * ``March 15, 2023``, ``Mar 15 2023`` and ``15 March 2023``

    Month names follow the process locale (English under the default C
    locale).  Other inputs, such as relative dates (``yesterday``), bare
    timestamps or day‑first numeric forms like ``15/03/2023``, are not
    recognised.  Blank or unparseable input yields ``None``.
    """
    if text is None:
        return None
    value = str(text).strip()
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    iso_value = value[:-1] + "+00:00" if value.endswith(("Z", "z")) else value
    try:
        return datetime.fromisoformat(iso_value).date()
    except ValueError:
        pass
    parts = value.split()
    if len(parts) == 4 and parts[0].title() in _WEEKDAYS and parts[1].title() in _MONTHS:
        try:
            return date(int(parts[3]), _MONTHS.index(parts[1].title()) + 1, int(parts[2]))
        except ValueError:
            return None
    for fmt in _FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    return None


def format_date(value: date) -> str:
    """Render ``value`` as ``"Www Mmm dd yyyy"``."""
    return "%s %s %02d %04d" % (
        _WEEKDAYS[value.weekday()],
        _MONTHS[value.month - 1],
        value.day,
        value.year,
    )

"""
Reminder Composer.

Turns a birthday record into the subject and HTML body of a reminder
email. Everything here is a pure function of its arguments and the
current instant.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from html import escape
from string import Template
from typing import TYPE_CHECKING, List, Optional, Tuple

if TYPE_CHECKING:
    from birthday_mailer.api.validation import BirthdayReminderRequest


MILLISECONDS_PER_DAY = 24 * 60 * 60 * 1000

# Flag attribute -> display label, in display order
REMINDER_TAGS: Tuple[Tuple[str, str], ...] = (
    ("on_day", "On Day"),
    ("day_before", "Day Before"),
    ("one_week_before", "1 Week Before"),
    ("two_weeks_before", "2 Weeks Before"),
)

TODAY = "today!"
TOMORROW = "tomorrow"
IN_ONE_WEEK = "in 1 week"
IN_TWO_WEEKS = "in 2 weeks"


@dataclass(frozen=True)
class ReminderEmail:
    """Subject and HTML body of a composed reminder."""
    subject: str
    html: str


def now_utc() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)


def active_reminder_tags(
    on_day: bool,
    day_before: bool,
    one_week_before: bool,
    two_weeks_before: bool,
) -> List[str]:
    """
    Collect the labels of the enabled reminder flags.

    The order is always On Day, Day Before, 1 Week Before, 2 Weeks Before.
    """
    flags = {
        "on_day": on_day,
        "day_before": day_before,
        "one_week_before": one_week_before,
        "two_weeks_before": two_weeks_before,
    }
    return [label for attr, label in REMINDER_TAGS if flags[attr]]


def distance_in_days(next_birthday_ms: int, now: Optional[datetime] = None) -> Tuple[int, bool]:
    """
    Whole-day distance between a timestamp and now.

    Args:
        next_birthday_ms: Epoch timestamp in milliseconds.
        now: Reference instant, defaults to the current UTC time.

    Returns:
        Tuple of (days, ahead). Days are rounded half-up on the absolute
        distance; ahead is True only when the timestamp is strictly later.
    """
    now = now or now_utc()
    delta_ms = next_birthday_ms - now.timestamp() * 1000
    days = math.floor(abs(delta_ms) / MILLISECONDS_PER_DAY + 0.5)
    return days, delta_ms > 0


def relative_time_phrase(next_birthday_ms: int, now: Optional[datetime] = None) -> str:
    """
    Describe when the birthday happens relative to now.

    Returns "today!", "tomorrow", "in 1 week" or "in 2 weeks" for the
    recognized windows, "in N days" for any other future distance and
    an empty string for birthdays more than a day in the past.
    """
    days, ahead = distance_in_days(next_birthday_ms, now)

    if not ahead:
        return TODAY if days <= 1 else ""
    if days == 0:
        return TODAY
    if days == 1:
        return TOMORROW
    if 6 <= days <= 8:
        return IN_ONE_WEEK
    if 13 <= days <= 15:
        return IN_TWO_WEEKS
    return f"in {days} days"


def ordinal(day: int) -> str:
    """Day of month with its English ordinal suffix (1st, 2nd, 11th...)."""
    if 11 <= day % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def format_birthday_date(next_birthday_ms: int) -> str:
    """Format a millisecond timestamp as e.g. "April 3rd" (UTC)."""
    moment = datetime.fromtimestamp(next_birthday_ms / 1000, tz=timezone.utc)
    return f"{moment.strftime('%B')} {ordinal(moment.day)}"


REMINDER_TEMPLATE = Template("""

<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.0 Transitional//EN" "http://www.w3.org/TR/xhtml1/DTD/xhtml1-transitional.dtd">
<meta http-equiv="Content-Type" content="text/html; charset=UTF-8" />
<title>Birthday Reminder</title>
<html lang="en">

  <head data-id="__react-email-head"></head>

  <body data-id="__react-email-body" style="background-color:rgb(255,255,255);margin-top:auto;margin-bottom:auto;margin-left:auto;margin-right:auto;font-family:ui-sans-serif, system-ui, -apple-system, BlinkMacSystemFont, Segoe UI, Roboto, Helvetica Neue, Arial, Noto Sans, sans-serif, Apple Color Emoji, Segoe UI Emoji, Segoe UI Symbol, Noto Color Emoji">
    <table align="center" width="100%" data-id="__react-email-container" role="presentation" cellSpacing="0" cellPadding="0" border="0" style="max-width:37.5em;margin-top:40px;margin-bottom:40px;margin-left:auto;margin-right:auto;padding-left:20px;padding-right:20px;width:465px">
      <tbody>
        <tr style="width:100%">
          <td>
            <table align="center" width="100%" data-id="react-email-section" border="0" cellPadding="0" cellSpacing="0" role="presentation">
              <tbody>
                <tr>
                  <td>
                    <p data-id="react-email-text" style="font-size:0.875rem;line-height:1.25rem;margin:20px 0;color:rgb(100,116,139)">A reminder from <a href="https://birthdays.run" data-id="react-email-link" target="_blank" style="color:rgb(37,99,235);text-decoration:none;text-decoration-line:none">Birthdays.run</a></p>
                  </td>
                </tr>
              </tbody>
            </table>
            <table align="center" width="100%" data-id="react-email-section" border="0" cellPadding="0" cellSpacing="0" role="presentation" style="margin-top:2rem">
              <tbody>
                <tr>
                  <td><img data-id="react-email-img" alt="Birthdays.run" src="https://birthdays.run/birthdays.svg" height="96" style="display:block;outline:none;border:none;text-decoration:none;margin-top:0px;margin-bottom:0px;margin-left:auto;margin-right:auto" /></td>
                </tr>
              </tbody>
            </table>
            <p data-id="react-email-text" style="font-size:1.25rem;line-height:1.75rem;margin:16px 0;font-weight:500;margin-top:2.5rem;text-align:center">${name}&#x27;s birthday is ${phrase}</p>
            <p data-id="react-email-text" style="font-size:1.25rem;line-height:1.75rem;margin:16px 0;font-weight:500;margin-bottom:2.5rem;text-align:center">On ${date}</p>
            <hr data-id="react-email-hr" style="width:100%;border:none;border-top:1px solid #eaeaea" />
            <p data-id="react-email-text" style="font-size:0.875rem;line-height:1.25rem;margin:16px 0;font-weight:500;margin-top:2.5rem">Name: ${name} ${last_name} </p>
            <p data-id="react-email-text" style="font-size:0.875rem;line-height:1.25rem;margin:16px 0;font-weight:500">Reminders: ${reminders}</p>
          </td>
        </tr>
      </tbody>
    </table>
  </body>

</html>
""")


def render_reminder_html(
    name: str,
    last_name: str,
    phrase: str,
    formatted_date: str,
    reminders: str,
) -> str:
    """Render the reminder email body. Text values are HTML-escaped."""
    return REMINDER_TEMPLATE.substitute(
        name=escape(name),
        last_name=escape(last_name),
        phrase=escape(phrase),
        date=escape(formatted_date),
        reminders=escape(reminders),
    )


def reminder_subject(name: str) -> str:
    return f"{name}'s Birthday"


def compose_reminder(
    request: "BirthdayReminderRequest",
    now: Optional[datetime] = None,
) -> ReminderEmail:
    """
    Compose the reminder email for a birthday record.

    Args:
        request: Validated birthday reminder request.
        now: Reference instant for the relative phrase.

    Returns:
        ReminderEmail with subject and HTML body.
    """
    tags = active_reminder_tags(
        request.on_day,
        request.day_before,
        request.one_week_before,
        request.two_weeks_before,
    )

    html = render_reminder_html(
        name=request.name,
        last_name=request.last_name or "",
        phrase=relative_time_phrase(request.next_birthday, now),
        formatted_date=format_birthday_date(request.next_birthday),
        reminders=", ".join(tags),
    )

    return ReminderEmail(subject=reminder_subject(request.name), html=html)

"""
CSV export of attendee records.
"""

import csv
from typing import Iterable, TextIO

from django.utils import timezone

from apps.attendees.models import Attendee, IdType


def _datetime(value):
    return timezone.localtime(value).strftime('%Y-%m-%d %H:%M') if value else ''


def _date(value):
    return value.isoformat() if value else ''


def _yes_no(value):
    return 'Yes' if value else 'No'


def _joined(values):
    return '; '.join(str(v) for v in values or [])


def _registered_by(attendee):
    if attendee.registered_by is None:
        return 'Invitation' if attendee.invitation_id else ''
    return attendee.registered_by.get_display_name()


EXPORT_COLUMNS = [
    ('ID', lambda a: str(a.id)),
    ('REFERENCE', lambda a: a.id.hex[-8:].upper()),
    ('ATTENDEE TYPE', lambda a: a.category),
    ('STATUS', lambda a: a.status),
    ('REGISTRATION METHOD', lambda a: a.registration_method),
    ('DATE CREATED', lambda a: _datetime(a.created_at)),
    ('DATE UPDATED', lambda a: _datetime(a.updated_at)),
    ('TITLE', lambda a: a.title),
    ('FIRST NAME', lambda a: a.first_name),
    ('LAST NAME', lambda a: a.last_name),
    ('EMAIL', lambda a: a.email),
    ('MOBILE NUMBER', lambda a: a.mobile_number),
    ('COUNTRY CODE', lambda a: a.country_code),
    ('NATIONALITY', lambda a: a.nationality),
    ('COUNTRY OF RESIDENCE', lambda a: a.country_of_residence),
    ('DATE OF BIRTH', lambda a: _date(a.date_of_birth)),
    ('RELIGION', lambda a: a.religion),
    ('ORGANIZATION', lambda a: a.organization),
    ('JOB TITLE', lambda a: a.job_title),
    ('LEVEL', lambda a: a.level),
    ('LEVEL SPECIFY', lambda a: a.level_specify),
    ('WORK ADDRESS', lambda a: a.work_address),
    ('WORK CITY', lambda a: a.work_city),
    ('WORK COUNTRY', lambda a: a.work_country),
    ('LINKEDIN ACCOUNT', lambda a: a.linkedin_account),
    ('ID TYPE', lambda a: a.id_type),
    ('ID NUMBER', lambda a: a.id_number),
    # Issue dates are only collected for passports
    ('ISSUE DATE', lambda a: _date(a.issue_date) if a.id_type == IdType.PASSPORT else ''),
    ('EXPIRY DATE', lambda a: _date(a.expiry_date)),
    ('ISSUE PLACE', lambda a: a.issue_place),
    ('NEED VISA', lambda a: _yes_no(a.need_visa)),
    ('FACE PHOTO URL', lambda a: a.face_photo_url),
    ('ID PHOTO URL', lambda a: a.id_photo_url),
    ('AREAS OF INTEREST', lambda a: _joined(a.areas_of_interest)),
    ('PRIMARY NATURE OF BUSINESS', lambda a: a.primary_nature_of_business),
    ('PREVIOUS ATTENDANCE', lambda a: _yes_no(a.previous_attendance)),
    ('PREVIOUS YEARS', lambda a: _joined(a.previous_years)),
    ('REGISTERED BY', _registered_by),
]


def export_filename(today=None) -> str:
    today = today or timezone.localdate()
    return f"attendees-{today.isoformat()}.csv"


def write_attendees_csv(attendees: Iterable[Attendee], stream: TextIO) -> int:
    """
    Write one header row and one row per attendee to ``stream``.

    Returns:
        Number of attendee rows written
    """
    writer = csv.writer(stream)
    writer.writerow([header for header, _ in EXPORT_COLUMNS])

    count = 0
    for attendee in attendees:
        writer.writerow([value(attendee) for _, value in EXPORT_COLUMNS])
        count += 1
    return count

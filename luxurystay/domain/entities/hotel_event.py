"""Domain events raised by the hotel modules that produce notifications."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass
class BookingConfirmation:
    """Reservation details sent to the guest once a booking is confirmed."""

    reservation_id: str
    room_number: str
    check_in_date: date | str
    check_out_date: date | str


@dataclass
class MaintenanceAlert:
    """Issue reported for a room that the maintenance staff must handle."""

    room_id: str
    issue: str
    priority: str
    reported_by: str


@dataclass
class HousekeepingTask:
    """Cleaning or turndown task assigned to a housekeeper."""

    room_id: str
    task_type: str
    priority: str
    assigned_to: str


@dataclass
class StayReminder:
    """Upcoming check-in or check-out for a guest."""

    guest_id: str
    reservation_id: str
    room_number: str
    scheduled_for: date | str


@dataclass
class BillIssued:
    """Bill generated for a reservation."""

    guest_id: str
    bill_id: str
    reservation_id: str
    amount: str
    currency: str = "USD"


@dataclass
class SystemAnnouncement:
    """Message broadcast to every connected user."""

    title: str
    message: str
    priority: str = "medium"


__all__ = [
    "BillIssued",
    "BookingConfirmation",
    "HousekeepingTask",
    "MaintenanceAlert",
    "StayReminder",
    "SystemAnnouncement",
]

"""Age and training program derivation."""

from datetime import date


def calculate_age(dob: date, on: date) -> int:
    """Whole calendar years between date of birth and `on`."""
    years = on.year - dob.year
    if (on.month, on.day) < (dob.month, dob.day):
        years -= 1
    return max(years, 0)


def program_label(age: int, weight: float) -> str:
    """Starting program for an athlete; first matching rule wins."""
    if age > 60:
        return "Mobility & Joint Health Fundamentals"
    if age < 18:
        return "Youth Athletic Foundation"
    if weight > 100:
        return "Low Impact Conditioning & Stability"
    if age > 40:
        return "Functional Strength & Recovery"
    return "High Performance Conditioning"

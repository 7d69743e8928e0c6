from datetime import date

import pytest
from pydantic import ValidationError

from mindconnect.routes.availability_routes import (
    AvailabilityCreate,
    AvailabilityHours,
    resolve_available_dates,
    validate_clock_time,
)


def test_validate_clock_time_accepts_24_hour_values() -> None:
    assert validate_clock_time(' 08:30 ') == '08:30'
    assert validate_clock_time('23:59') == '23:59'


@pytest.mark.parametrize('value', ['8:30', '24:00', '12:60', '9am', ''])
def test_validate_clock_time_rejects_malformed_values(value: str) -> None:
    with pytest.raises(ValueError):
        validate_clock_time(value)


def test_availability_hours_require_start_before_end() -> None:
    with pytest.raises(ValidationError):
        AvailabilityHours(startTime='17:00', endTime='09:00')


def test_availability_create_bounds_day_of_week() -> None:
    with pytest.raises(ValidationError):
        AvailabilityCreate(dayOfWeek=7, startTime='09:00', endTime='17:00')


def test_resolve_available_dates_covers_multi_year_ranges() -> None:
    dates = resolve_available_dates(date(2025, 1, 1), date(2026, 6, 1))

    assert dates[0] == '2025-01-01'
    assert dates[-1] == '2026-06-01'
    assert len(dates) == 369
    assert all(date.fromisoformat(day).weekday() < 5 for day in dates)


def test_list_rules_returns_seeded_weekdays(client) -> None:
    response = client.get('/api/availability')

    assert response.status_code == 200
    assert response.json()[0] == {
        'id': 1,
        'dayOfWeek': 1,
        'startTime': '09:00',
        'endTime': '17:00',
        'isAvailable': True,
    }
    assert [rule['dayOfWeek'] for rule in response.json()] == [1, 2, 3, 4, 5]


def test_available_dates_exclude_weekends(client) -> None:
    response = client.get('/api/availability', params={'start': '2025-03-07', 'end': '2025-03-17'})

    assert response.status_code == 200
    assert response.json() == {
        'available_dates': [
            '2025-03-07',
            '2025-03-10',
            '2025-03-11',
            '2025-03-12',
            '2025-03-13',
            '2025-03-14',
            '2025-03-17',
        ],
    }


def test_available_dates_need_both_bounds(client) -> None:
    response = client.get('/api/availability', params={'start': '2025-03-07'})

    assert response.status_code == 400
    assert response.json() == {'detail': 'Both start and end dates are required.'}


def test_available_dates_reject_bad_dates(client) -> None:
    response = client.get('/api/availability', params={'start': 'yesterday', 'end': '2025-03-17'})

    assert response.status_code == 400


def test_get_rules_for_day(client) -> None:
    assert [rule['dayOfWeek'] for rule in client.get('/api/availability/3').json()] == [3]
    assert client.get('/api/availability/0').json() == []
    assert client.get('/api/availability/7').status_code == 400


def test_post_day_updates_existing_rule(client) -> None:
    response = client.post('/api/availability/1', json={'startTime': '10:00', 'endTime': '14:00'})

    assert response.status_code == 200
    assert response.json() == {
        'id': 1,
        'dayOfWeek': 1,
        'startTime': '10:00',
        'endTime': '14:00',
        'isAvailable': True,
    }
    assert len(client.get('/api/availability/1').json()) == 1


def test_post_day_creates_rule_for_closed_day(client) -> None:
    response = client.post('/api/availability/6', json={'startTime': '10:00', 'endTime': '12:00', 'isAvailable': False})

    assert response.status_code == 200
    assert response.json()['dayOfWeek'] == 6
    assert response.json()['isAvailable'] is False
    assert client.get('/api/availability/6').json() == [response.json()]


def test_post_day_rejects_invalid_hours(client) -> None:
    response = client.post('/api/availability/1', json={'startTime': '18:00', 'endTime': '09:00'})

    assert response.status_code == 400
    assert response.json()['detail'] == 'Invalid request data'


def test_create_rule(client) -> None:
    response = client.post('/api/availability', json={'dayOfWeek': 0, 'startTime': '12:00', 'endTime': '15:00'})

    assert response.status_code == 201
    assert response.json()['id'] == 6


def test_patch_rule(client) -> None:
    response = client.patch('/api/availability/2', json={'isAvailable': False})

    assert response.status_code == 200
    assert response.json()['isAvailable'] is False
    assert response.json()['startTime'] == '09:00'


def test_patch_rule_checks_merged_hours(client) -> None:
    response = client.patch('/api/availability/2', json={'startTime': '18:00'})

    assert response.status_code == 400
    assert response.json() == {'detail': 'Start time must be earlier than end time.'}


def test_patch_rule_rejects_null_times(client) -> None:
    assert client.patch('/api/availability/2', json={'endTime': None}).status_code == 400


def test_patch_unknown_rule_returns_404(client) -> None:
    assert client.patch('/api/availability/99', json={'isAvailable': False}).status_code == 404


def test_delete_rule(client) -> None:
    assert client.delete('/api/availability/5').status_code == 204
    assert client.delete('/api/availability/5').status_code == 404
    assert client.get('/api/availability/5').json() == []

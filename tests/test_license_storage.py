from datetime import date

from app.models import Option
from app.utils.options import get_option, update_option


def test_load_missing_state_uses_defaults(store):
    state = store.load('time-tracker')
    assert state.slug == 'time-tracker'
    assert state.license_key == ''
    assert state.status == 'missing'
    assert state.last_checked_date is None
    assert state.message is None

    # reading does not materialise rows
    assert Option.query.count() == 0


def test_fields_are_persisted_as_separate_options(store):
    store.save_license_key('time-tracker', 'ABC')
    store.save_status('time-tracker', 'valid')
    store.save_checked_date('time-tracker', date(2026, 3, 1))
    store.save_message('time-tracker', 'Something went wrong')

    assert get_option('time_tracker_license_key') == 'ABC'
    assert get_option('time_tracker_license_status') == 'valid'
    assert get_option('time_tracker_license_checked') == '2026-03-01'
    assert get_option('time_tracker_license_message') == 'Something went wrong'

    state = store.load('time-tracker')
    assert state.license_key == 'ABC'
    assert state.status == 'valid'
    assert state.last_checked_date == date(2026, 3, 1)
    assert state.message == 'Something went wrong'


def test_states_of_different_addons_do_not_mix(store):
    store.save_status('time-tracker', 'valid')
    assert store.load('calendar-view').status == 'missing'


def test_unparseable_checked_date_counts_as_never_checked(store):
    update_option('time_tracker_license_checked', 'yesterday')
    assert store.load('time-tracker').last_checked_date is None


def test_update_option_overwrites_existing_row(app):
    update_option('active_plugins', '[]')
    update_option('active_plugins', '["a/a.php"]')
    assert Option.query.filter_by(name='active_plugins').count() == 1
    assert get_option('active_plugins') == '["a/a.php"]'
    assert get_option('nothing_here', 'fallback') == 'fallback'

from datetime import date, datetime, timedelta

from app.services.licensing import compute_gate, invalid_license_messages, run_one_check

TODAY = date(2026, 3, 20)
NOW = datetime(2026, 3, 20, 9, 0)


def _register(store, slug, status='valid', checked_days_ago=None):
    store.save_license_key(slug, f'KEY-{slug}')
    store.save_status(slug, status)
    if checked_days_ago is not None:
        store.save_checked_date(slug, TODAY - timedelta(days=checked_days_ago))


class CountingChecker:
    """Wraps a checker and counts the add-ons it checks and inspects."""

    def __init__(self, checker):
        self._checker = checker
        self.store = checker.store
        self.checked = []
        self.inspected = []

    def is_due(self, state, period_days=None, now=None):
        return self._checker.is_due(state, period_days, now)

    def check(self, descriptor, state=None):
        self.checked.append(descriptor.slug)
        return self._checker.check(descriptor, state)

    def get_invalid_message(self, state):
        self.inspected.append(state.slug)
        return self._checker.get_invalid_message(state)


def test_run_one_check_checks_only_first_due_addon(checker, store, installed_addons):
    for addon in installed_addons:
        _register(store, addon.slug, checked_days_ago=30)
    counting = CountingChecker(checker)

    checked = run_one_check(installed_addons, checker=counting, now=NOW)

    assert checked.slug == 'time-tracker'
    assert counting.checked == ['time-tracker']
    assert store.load('time-tracker').last_checked_date == TODAY
    assert store.load('calendar-view').last_checked_date == TODAY - timedelta(days=30)


def test_run_one_check_skips_addons_not_due(checker, store, fake_client, installed_addons):
    _register(store, 'time-tracker', checked_days_ago=2)
    _register(store, 'calendar-view', checked_days_ago=20)
    _register(store, 'copy-project', checked_days_ago=40)
    counting = CountingChecker(checker)

    checked = run_one_check(installed_addons, checker=counting, now=NOW)

    assert checked.slug == 'calendar-view'
    assert counting.checked == ['calendar-view']
    assert fake_client.calls == [('KEY-calendar-view', '43', 'https://pm.example.com')]


def test_run_one_check_noop_when_nothing_due(checker, store, fake_client, installed_addons):
    for addon in installed_addons:
        _register(store, addon.slug, checked_days_ago=1)

    assert run_one_check(installed_addons, checker=checker, now=NOW) is None
    assert fake_client.calls == []


def test_run_one_check_rotates_over_ticks(checker, store, installed_addons):
    for addon in installed_addons:
        _register(store, addon.slug)

    order = [run_one_check(installed_addons, checker=checker, now=NOW) for _ in range(4)]

    assert [a.slug if a else None for a in order] == ['time-tracker', 'calendar-view', 'copy-project', None]


def test_run_one_check_with_no_addons(checker):
    assert run_one_check([], checker=checker, now=NOW) is None


def test_run_one_check_unregistered_addon_gets_missing_key_message(checker, store, fake_client, installed_addons):
    checked = run_one_check(installed_addons, checker=checker, now=NOW)

    assert checked.slug == 'time-tracker'
    assert fake_client.calls == []
    assert "haven't registered" in store.load('time-tracker').message


def test_compute_gate_false_when_all_valid(checker, store, installed_addons):
    for addon in installed_addons:
        _register(store, addon.slug)
    assert compute_gate(installed_addons, checker=checker) is False


def test_compute_gate_true_when_any_invalid_and_scans_all(checker, store, installed_addons):
    _register(store, 'time-tracker', status='expired')
    _register(store, 'calendar-view')
    _register(store, 'copy-project')
    counting = CountingChecker(checker)

    assert compute_gate(installed_addons, checker=counting) is True
    assert counting.inspected == ['time-tracker', 'calendar-view', 'copy-project']
    assert counting.checked == []


def test_compute_gate_treats_missing_as_invalid(checker, store, installed_addons):
    _register(store, 'time-tracker')
    _register(store, 'calendar-view')
    # copy-project never registered

    assert compute_gate(installed_addons, checker=checker) is True


def test_compute_gate_with_no_addons(checker):
    assert compute_gate([], checker=checker) is False


def test_invalid_license_messages_lists_each_invalid_addon(checker, store, installed_addons):
    _register(store, 'time-tracker')
    _register(store, 'calendar-view', status='disabled')
    store.save_message('copy-project', 'custom notice')

    invalid = invalid_license_messages(installed_addons, checker=checker)

    assert [(addon.slug, message.split('.')[0]) for addon, message in invalid] == [
        ('calendar-view', 'The license for Calendar View is not valid'),
        ('copy-project', 'custom notice'),
    ]

from datetime import date

import pytest
import requests
from apscheduler.schedulers.background import BackgroundScheduler

from app.utils import scheduler as scheduler_module


@pytest.fixture
def paused_scheduler(monkeypatch):
    """A scheduler that is never started, so jobs only run when called."""
    sched = BackgroundScheduler()
    monkeypatch.setattr(scheduler_module, 'scheduler', sched)
    return sched


def test_register_license_checker_only_once(app, paused_scheduler):
    assert scheduler_module.register_license_checker(app) is True
    assert scheduler_module.register_license_checker(app) is False

    jobs = paused_scheduler.get_jobs()
    assert [job.id for job in jobs] == [scheduler_module.LICENSE_CHECKER_JOB_ID]


def test_unregister_license_checker(app, paused_scheduler):
    scheduler_module.register_license_checker(app)
    scheduler_module.unregister_license_checker()
    assert paused_scheduler.get_job(scheduler_module.LICENSE_CHECKER_JOB_ID) is None

    # unregistering twice is harmless
    scheduler_module.unregister_license_checker()


def test_run_license_checker_job(app, store, installed_addons, monkeypatch):
    store.save_license_key('time-tracker', 'ABC')
    store.save_status('time-tracker', 'valid')

    class DummyResp:
        status_code = 200

        def json(self):
            return {'license': 'disabled'}

    monkeypatch.setattr(requests, 'post', lambda *a, **k: DummyResp())

    scheduler_module.run_license_checker(app)

    state = store.load('time-tracker')
    assert state.status == 'disabled'
    assert state.last_checked_date == date.today()
    assert store.load('calendar-view').last_checked_date is None


def test_run_license_checker_job_survives_timeouts(app, store, installed_addons, monkeypatch):
    store.save_license_key('time-tracker', 'ABC')
    store.save_status('time-tracker', 'valid')

    def raise_timeout(*a, **k):
        raise requests.exceptions.Timeout()

    monkeypatch.setattr(requests, 'post', raise_timeout)

    scheduler_module.run_license_checker(app)

    state = store.load('time-tracker')
    assert state.status == 'valid'
    assert state.message.endswith('(invalid_response)')

"""Background task scheduler for the add-on license checker"""
from apscheduler.schedulers.background import BackgroundScheduler
from datetime import datetime
import logging

logger = logging.getLogger(__name__)

LICENSE_CHECKER_JOB_ID = 'upstream_license_checker'

# Global scheduler instance
scheduler = None


def init_scheduler(app):
    """Initialize APScheduler with Flask app context"""
    global scheduler

    if scheduler is None:
        scheduler = BackgroundScheduler()
        scheduler.configure(
            jobstores={'default': {'type': 'memory'}},
            job_defaults={'coalesce': True, 'max_instances': 1}
        )

    register_license_checker(app)

    if not scheduler.running:
        scheduler.start()
        logger.info("Background scheduler started")


def register_license_checker(app):
    """Schedule the license checker unless it is already scheduled.

    The first run happens right away, then every LICENSE_CHECK_INTERVAL_HOURS.
    """
    if scheduler.get_job(LICENSE_CHECKER_JOB_ID) is not None:
        return False

    scheduler.add_job(
        run_license_checker,
        'interval',
        hours=app.config.get('LICENSE_CHECK_INTERVAL_HOURS', 24),
        next_run_time=datetime.now(),
        args=[app],
        id=LICENSE_CHECKER_JOB_ID,
        name='Check one add-on license',
        replace_existing=True
    )
    logger.info("License checker job registered")
    return True


def unregister_license_checker():
    """Stop future license checks (add-on deactivation / teardown)."""
    if scheduler is not None and scheduler.get_job(LICENSE_CHECKER_JOB_ID) is not None:
        scheduler.remove_job(LICENSE_CHECKER_JOB_ID)
        logger.info("License checker job unregistered")


def run_license_checker(app):
    """Check the license of the next add-on whose turn it is"""
    with app.app_context():
        from app import db
        from app.services.licensing import get_installed_addons, run_one_check

        try:
            checked = run_one_check(get_installed_addons())
            if checked is not None:
                logger.info(f"License checker: checked '{checked.slug}'")
        except Exception as e:
            logger.error(f"Error during license check: {e}")
            db.session.rollback()


def shutdown_scheduler():
    """Shutdown the scheduler gracefully"""
    global scheduler

    if scheduler and scheduler.running:
        unregister_license_checker()
        scheduler.shutdown()
        logger.info("Background scheduler stopped")
    scheduler = None

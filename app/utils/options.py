"""Key-value option storage backed by the Option table."""

import json
import logging

from sqlalchemy.exc import SQLAlchemyError

from app import db
from app.models import Option

logger = logging.getLogger(__name__)


def get_option(name, default=None):
    """Return the stored value for ``name`` or ``default`` when absent."""
    option = Option.query.filter_by(name=name).first()
    if option is None:
        return default
    return option.value


def update_option(name, value, autoload=True):
    """Create or overwrite an option and commit it right away."""
    option = Option.query.filter_by(name=name).first()
    if option is None:
        option = Option(name=name, value=value, autoload=autoload)
        db.session.add(option)
    else:
        option.value = value
        option.autoload = autoload
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        logger.error(f"Options: failed to update '{name}': {e}")
        db.session.rollback()
        raise
    logger.debug(f"Options: updated '{name}'")


def get_json_option(name, default=None):
    """Read an option holding a JSON document (e.g. ``active_plugins``)."""
    raw = get_option(name)
    if raw is None:
        return default
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        logger.error(f"Options: invalid JSON in option '{name}': {e}")
        return default


def update_json_option(name, value, autoload=True):
    update_option(name, json.dumps(value), autoload=autoload)

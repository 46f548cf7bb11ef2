from flask import Blueprint, abort, jsonify

from app.services.content_types import content_types, has_invalid_license

bp = Blueprint('content', __name__, url_prefix='/content')


@bp.route('/')
def list_types():
    """Content types that are currently publicly queryable"""
    types = content_types.list_types(has_invalid_license())
    return jsonify({
        'content_types': sorted(name for name, args in types.items() if args.get('publicly_queryable'))
    })


@bp.route('/<content_type>/')
def view(content_type):
    args = content_types.get_args(content_type, has_invalid_license())
    if args is None or not args.get('publicly_queryable'):
        abort(404)
    return jsonify({'content_type': content_type, **args})

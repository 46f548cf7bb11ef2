import atexit

from app import create_app, db
from app.models import Option
from app.utils.scheduler import shutdown_scheduler

app = create_app()

# Stop the license checker when the process exits
atexit.register(shutdown_scheduler)


@app.shell_context_processor
def make_shell_context():
    return {
        "db": db,
        "Option": Option,
    }


if __name__ == '__main__':
    app.run(debug=True, use_reloader=False)

from app import db
import datetime


class Option(db.Model):
    """Named setting stored as text, one row per option name."""
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(191), unique=True, nullable=False, index=True)
    value = db.Column(db.Text, nullable=False, default='')
    autoload = db.Column(db.Boolean, default=True, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.datetime.utcnow,
                           onupdate=datetime.datetime.utcnow)

    def __str__(self):
        return f"{self.name}={self.value}"

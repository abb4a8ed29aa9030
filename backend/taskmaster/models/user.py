from taskmaster.extensions import db


class User(db.Model):
    """Username-only account; created on first reference, no password."""
    __tablename__ = "users"

    id = db.Column("user_id", db.Integer, primary_key=True)
    username = db.Column(db.String(255), unique=True, nullable=False)

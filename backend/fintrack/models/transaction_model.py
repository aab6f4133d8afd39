from fintrack.models import db
from fintrack.storage.entities import utcnow


class TransactionRecord(db.Model):
    """
    A single income or expense entry owned by one user.
    Amounts are stored as floats, same as the API exposes them.
    """

    __tablename__ = "transactions"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)

    # Ownership
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), index=True, nullable=False)

    # Core transaction data
    amount = db.Column(db.Float, nullable=False)
    category = db.Column(db.String(120), nullable=False)
    description = db.Column(db.Text, nullable=False)
    date = db.Column(db.DateTime, nullable=False, default=utcnow)
    type = db.Column(db.String(10), nullable=False)  # income | expense

    # Misc
    recurring = db.Column(db.Boolean, nullable=False, default=False)
    note = db.Column(db.Text, nullable=True)

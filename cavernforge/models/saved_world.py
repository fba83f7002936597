import datetime

from cavernforge import db


def _utcnow():
    return datetime.datetime.now(datetime.timezone.utc)


class SavedWorld(db.Model):
    """Persisted session state: the seed and avatar position, never the grid."""

    __tablename__ = 'saved_worlds'
    id = db.Column(db.Integer, primary_key=True)
    seed = db.Column(db.BigInteger, nullable=False)
    pos_x = db.Column(db.Integer, default=0)
    pos_y = db.Column(db.Integer, default=0)
    created_at = db.Column(db.DateTime, default=_utcnow)
    updated_at = db.Column(db.DateTime, default=_utcnow, onupdate=_utcnow)

    def __repr__(self):
        return f'<SavedWorld {self.id} seed={self.seed} pos=({self.pos_x},{self.pos_y})>'

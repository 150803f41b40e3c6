"""
Stored Collection Model
One row per collection or document; the payload is the whole JSON blob.
"""

from datetime import datetime

from medequip import db


class StoredCollection(db.Model):
    __tablename__ = 'stored_collections'

    key = db.Column(db.String(64), primary_key=True)
    payload = db.Column(db.Text, nullable=False, default='[]')
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f'<StoredCollection {self.key}>'

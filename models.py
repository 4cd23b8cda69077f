from extensions import db
from datetime import datetime


class VisitorPreference(db.Model):
    """One durable key-value preference (theme, language) of one visitor"""
    __tablename__ = 'visitor_preferences'
    id = db.Column(db.Integer, primary_key=True)
    visitor_id = db.Column(db.String(36), nullable=False, index=True)
    key = db.Column(db.String(64), nullable=False)
    value = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        db.UniqueConstraint('visitor_id', 'key', name='uq_visitor_preference_key'),
    )

    def __repr__(self):
        return f'<VisitorPreference {self.visitor_id}:{self.key}={self.value}>'

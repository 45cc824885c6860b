from datetime import datetime, timezone
from storeapi.extensions import db, new_object_id, utc_isoformat


class Student(db.Model):
    __tablename__ = "students"

    id = db.Column(db.String(24), primary_key=True, default=new_object_id)
    name = db.Column(db.String(100), nullable=False)
    age = db.Column(db.Integer, nullable=False)
    course = db.Column(db.String(100), nullable=False)
    created_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )
    updated_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "age": self.age,
            "course": self.course,
            "createdAt": utc_isoformat(self.created_at),
            "updatedAt": utc_isoformat(self.updated_at),
        }

    def __repr__(self):
        return f"<Student {self.id}: {self.name}>"

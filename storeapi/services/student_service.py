import logging

from storeapi.models.student import Student
from storeapi.services.repository import DocumentRepository
from storeapi.services.validation import clean_student

logger = logging.getLogger(__name__)


class StudentRepository(DocumentRepository):
    model = Student
    label = "Student"
    invalid_id_message = "Invalid student ID format"

    def create(self, fields):
        student = Student(**clean_student(fields))
        self.session.add(student)
        self._commit("creating student")
        logger.info("Created student %s", student.id)
        return student

    def update(self, student_id, fields):
        student = self._load(student_id)
        for key, value in clean_student(fields, partial=True).items():
            setattr(student, key, value)
        self._commit("updating student")
        return student

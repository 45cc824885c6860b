"""Student endpoints, mounted at /students."""
from storeapi.blueprints.students import students_bp
from storeapi.extensions import db
from storeapi.schemas import Envelope, json_body, listing
from storeapi.services.student_service import StudentRepository
from storeapi.services.validation import require_student_fields


def _repo():
    return StudentRepository(db.session)


@students_bp.route("/", methods=["POST"], strict_slashes=False)
def create_student():
    body = json_body()
    require_student_fields(body)
    student = _repo().create(body)
    return Envelope(
        message="Student created successfully",
        status=201,
        data={"student": student.to_dict()},
    ).as_response()


@students_bp.route("/", methods=["GET"], strict_slashes=False)
def list_students():
    students = _repo().list_all()
    return listing("students", [s.to_dict() for s in students])


@students_bp.route("/<student_id>", methods=["GET"])
def get_student(student_id):
    return _repo().get_by_id(student_id).to_dict()


@students_bp.route("/<student_id>", methods=["PUT"])
def update_student(student_id):
    body = json_body()
    student = _repo().update(student_id, body)
    return Envelope(
        message="Student updated successfully",
        status=200,
        data={"student": student.to_dict()},
    ).as_response()


@students_bp.route("/<student_id>", methods=["DELETE"])
def delete_student(student_id):
    snapshot = _repo().delete(student_id)
    return Envelope(
        message="Student deleted successfully",
        status=200,
        data={"student": snapshot},
    ).as_response()

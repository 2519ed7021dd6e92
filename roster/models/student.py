"""Student model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from roster.core.database import Base
from roster.models.base import IDMixin, TimestampMixin


class Student(Base, IDMixin, TimestampMixin):
    """Student roster record."""

    __tablename__ = "students"

    student_id: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    student_name: Mapped[str] = mapped_column(String(100), nullable=False)
    grade_name: Mapped[str | None] = mapped_column(String(50), nullable=True)
    class_name: Mapped[str | None] = mapped_column(String(50), nullable=True)  # 'class' is reserved keyword
    # Text rather than a number so leading zeros survive
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    email: Mapped[str | None] = mapped_column(String(100), nullable=True)

    def __repr__(self) -> str:
        return f"<Student(id={self.id}, student_id={self.student_id}, name={self.student_name})>"

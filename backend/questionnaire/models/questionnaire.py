import re
from datetime import date, datetime

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from questionnaire.core.database import Base

# Storage format for date answers
_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")


class Questionnaire(Base):
    __tablename__ = "questionnaire"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(server_default=func.now())

    questions: Mapped[list["Question"]] = relationship(
        back_populates="questionnaire",
        order_by="Question.position",
        cascade="all, delete-orphan",
    )
    responses: Mapped[list["QuestionnaireResponse"]] = relationship(back_populates="questionnaire")

    def __repr__(self) -> str:
        return f"<Questionnaire {self.name}>"


class Question(Base):
    """A single question of a questionnaire.

    ``type`` is the response type tag ("date", "text", "numeric") used to
    pick the handler that stores and reports its answers.
    """

    __tablename__ = "questionnaire_question"
    __table_args__ = (Index("ix_questionnaire_question_questionnaire_id", "questionnaire_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    questionnaire_id: Mapped[int] = mapped_column(ForeignKey("questionnaire.id"), nullable=False)
    name: Mapped[str | None] = mapped_column(String(30))
    type: Mapped[str] = mapped_column(String(30), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    required: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    questionnaire: Mapped["Questionnaire"] = relationship(back_populates="questions")

    def check_date_format(self, value) -> bool:
        """Return True if value is a real calendar date written as YYYY-MM-DD."""
        if not isinstance(value, str) or not _ISO_DATE.fullmatch(value):
            return False
        try:
            date.fromisoformat(value)
        except ValueError:
            return False
        return True

    def __repr__(self) -> str:
        return f"<Question {self.id} ({self.type})>"

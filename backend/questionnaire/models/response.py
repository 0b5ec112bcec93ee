from sqlalchemy import Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from questionnaire.core.database import Base


class QuestionnaireResponse(Base):
    """One user's submission to a questionnaire.

    ``submitted`` is a Unix timestamp and ``complete`` is "y" or "n", the
    shapes the bulk reporting SQL filters and groups on.
    """

    __tablename__ = "questionnaire_response"
    __table_args__ = (
        Index("ix_questionnaire_response_questionnaireid", "questionnaireid"),
        Index("ix_questionnaire_response_userid", "userid"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    questionnaireid: Mapped[int] = mapped_column(ForeignKey("questionnaire.id"), nullable=False)
    userid: Mapped[int | None] = mapped_column(ForeignKey("user.id"))
    submitted: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    complete: Mapped[str] = mapped_column(String(1), nullable=False, default="n")
    grade: Mapped[float] = mapped_column(Float, nullable=False, default=0)

    questionnaire: Mapped["Questionnaire"] = relationship(back_populates="responses")
    user: Mapped["User | None"] = relationship()

    def __repr__(self) -> str:
        return f"<QuestionnaireResponse {self.id} complete={self.complete}>"


class ResponseDate(Base):
    __tablename__ = "questionnaire_response_date"
    __table_args__ = (Index("ix_questionnaire_response_date_response_question", "response_id", "question_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    response_id: Mapped[int] = mapped_column(ForeignKey("questionnaire_response.id"), nullable=False)
    question_id: Mapped[int] = mapped_column(ForeignKey("questionnaire_question.id"), nullable=False)
    # ISO date, YYYY-MM-DD
    response: Mapped[str | None] = mapped_column(String(10))


class ResponseText(Base):
    __tablename__ = "questionnaire_response_text"
    __table_args__ = (Index("ix_questionnaire_response_text_response_question", "response_id", "question_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    response_id: Mapped[int] = mapped_column(ForeignKey("questionnaire_response.id"), nullable=False)
    question_id: Mapped[int] = mapped_column(ForeignKey("questionnaire_question.id"), nullable=False)
    response: Mapped[str | None] = mapped_column(Text)


class ResponseOther(Base):
    """Free text typed into an "other" choice; only read by bulk reporting."""

    __tablename__ = "questionnaire_response_other"
    __table_args__ = (Index("ix_questionnaire_response_other_response_question", "response_id", "question_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    response_id: Mapped[int] = mapped_column(ForeignKey("questionnaire_response.id"), nullable=False)
    question_id: Mapped[int] = mapped_column(ForeignKey("questionnaire_question.id"), nullable=False)
    choice_id: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    response: Mapped[str | None] = mapped_column(Text)

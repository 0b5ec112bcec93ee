from sqlalchemy import ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from questionnaire.core.database import Base


class User(Base):
    __tablename__ = "user"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    firstname: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    lastname: Mapped[str] = mapped_column(String(100), nullable=False, default="")

    def __repr__(self) -> str:
        return f"<User {self.username}>"


class GroupMember(Base):
    __tablename__ = "groups_members"
    __table_args__ = (Index("ix_groups_members_groupid_userid", "groupid", "userid"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    groupid: Mapped[int] = mapped_column(Integer, nullable=False)
    userid: Mapped[int] = mapped_column(ForeignKey("user.id"), nullable=False)

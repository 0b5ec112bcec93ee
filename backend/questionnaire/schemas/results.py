from pydantic import BaseModel


class ResultRow(BaseModel):
    """One line of an aggregated results display."""

    text: str
    total: int | None = None
    # Used by the PDF template to stripe rows
    evencolor: bool = False
    respondent: str | None = None


class ResultsPage(BaseModel):
    """Plain aggregate handed to the results renderer.

    An empty page (no responses, no total) means there is nothing to show.
    """

    responses: list[ResultRow] | None = None
    total: str | None = None

    @property
    def is_empty(self) -> bool:
        return self.responses is None and self.total is None

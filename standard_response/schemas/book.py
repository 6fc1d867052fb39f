"""Book schemas for the reference /api/v1/books router."""


from standard_response.schemas.common import CamelModel

class BookOut(CamelModel):
    id: str
    title: str
    author: str
    country: str
    year: int

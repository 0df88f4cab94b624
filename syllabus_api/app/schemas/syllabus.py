"""
Pydantic schemas for syllabuses and their relations.

A syllabus is a named curriculum unit tied to an academic term.
Relations are directed parent→child edges between syllabuses.  The
JSON field names (``parents``, ``parentId``, ``childId``) are part of
the public contract, so they are declared as aliases; Python code uses
the snake_case attribute names.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class RelationRead(BaseModel):
    """A single hierarchy edge."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    parent_id: str = Field(..., alias="parentId", description="Identifier of the parent syllabus")
    child_id: str = Field(..., alias="childId", description="Identifier of the child syllabus")


class SyllabusRead(BaseModel):
    """Schema for reading a syllabus together with its relations."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    id: str
    name: str
    term: str
    relations: List[RelationRead] = Field(
        default_factory=list,
        alias="parents",
        description="Edges in which this syllabus is the parent, in storage order",
    )

"""
Roster management routes.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from typing import List
from app.db.session import get_db
from app.models.person import Person
from app.core.utils import normalize_name
from app.schemas.person import PersonCreate, PersonResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/people", tags=["people"])


@router.get("", response_model=List[PersonResponse])
async def list_people(db: Session = Depends(get_db)):
    """List the roster in the order people were added."""
    return db.query(Person).order_by(Person.id).all()


@router.post("", response_model=PersonResponse, status_code=status.HTTP_201_CREATED)
async def add_person(
    person_data: PersonCreate,
    db: Session = Depends(get_db)
):
    """Add a person to the roster."""
    existing = db.query(Person).filter(Person.name == person_data.name).first()
    if existing:
        logger.warning(f"Rejected duplicate person '{person_data.name}'")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Person already exists"
        )

    person = Person(name=person_data.name)
    db.add(person)
    db.commit()
    db.refresh(person)

    logger.info(f"Added person '{person.name}'")
    return person


@router.delete("/{name}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_person(
    name: str,
    db: Session = Depends(get_db)
):
    """
    Remove a person from the roster.

    Their expenses are kept; the balance engine ignores references to
    people who are no longer on the roster.
    """
    name = normalize_name(name)
    person = db.query(Person).filter(Person.name == name).first()
    if not person:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Person not found"
        )

    db.delete(person)
    db.commit()

    logger.info(f"Removed person '{name}'")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

from contextlib import contextmanager

from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from .database import get_db
from .errors import ForbiddenError, NotFoundError, ValidationError
from .service import TaskService
from .store import TaskStore


def get_task_service(db: Session = Depends(get_db)) -> TaskService:
    return TaskService(TaskStore(db))


@contextmanager
def translate_task_errors():
    """Re-raise task errors as HTTP errors."""
    try:
        yield
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    except ForbiddenError:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    except ValidationError as exc:
        raise HTTPException(
            status_code=422,
            detail={"message": str(exc), "errors": exc.errors},
        )

"""Authentication routes."""
from fastapi import APIRouter, HTTPException, Response, status

from todo_api.api.deps import AppSettings, DatabaseSession
from todo_api.core.auth import UsernameTakenError, authenticate_user, create_user, issue_token
from todo_api.schemas.user import TokenResponse, UserCreate, UserLogin, UserResponse

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(user_data: UserCreate, db: DatabaseSession, response: Response):
    """
    Register a new user.

    Args:
        user_data: User registration data
        db: Database session
        response: Outgoing response, used for the Location header

    Returns:
        Created user

    Raises:
        HTTPException: 400 if a field is empty, 409 if the username exists
    """
    try:
        user = create_user(db, user_data.username, user_data.password)
    except UsernameTakenError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    response.headers["Location"] = f"/users/{user.id}"
    return user


@router.post("/login", response_model=TokenResponse)
def login(credentials: UserLogin, db: DatabaseSession, settings: AppSettings):
    """
    Login and get a bearer token.

    Args:
        credentials: Login credentials
        db: Database session
        settings: Application settings

    Returns:
        Signed access token

    Raises:
        HTTPException: If credentials are invalid
    """
    user = authenticate_user(db, credentials.username, credentials.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return TokenResponse(token=issue_token(user, settings))

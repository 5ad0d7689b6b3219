# cuebook/routers/auth_routes.py

from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm
from sqlmodel import Session

from cuebook.auth import authenticate, create_access_token
from cuebook.db import get_session
from cuebook.errors import Unauthorized
from cuebook.schemas import Token

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
)


@router.post("/login", response_model=Token)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    session: Session = Depends(get_session),
):
    user = authenticate(session, form_data.username, form_data.password)
    if user is None:
        raise Unauthorized("Invalid credentials")

    token = create_access_token(user.username)
    return {"access_token": token, "token_type": "bearer"}

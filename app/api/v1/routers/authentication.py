from fastapi import APIRouter, Depends, status

from app.api.v1.dependencies import (
    get_auth_service,
    get_current_user,
    require_admin,
)
from app.db.models.users import User
from app.features.authentication.services import AuthService
from app.features.authentication.schemas import (
    LoginIn,
    LoginOut,
    RegisterIn,
    ChangePasswordIn,
    UserOut,
)
from app.features.shared.schemas import MessageOut

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
    responses={401: {"description": "Token absent ou invalide"}},
)

# -----------------------------
# Login
# -----------------------------
@router.post(
    "/login",
    summary="Se connecter",
    description="Vérifie email + mot de passe et retourne un bearer token.",
    response_model=LoginOut,
)
def login(payload: LoginIn, svc: AuthService = Depends(get_auth_service)):
    return svc.login(payload)

# -----------------------------
# Register (admin)
# -----------------------------
@router.post(
    "/register",
    summary="Créer un compte back-office (admin)",
    status_code=status.HTTP_201_CREATED,
    response_model=MessageOut,
)
def register(
    payload: RegisterIn,
    _admin: User = Depends(require_admin),
    svc: AuthService = Depends(get_auth_service),
):
    user = svc.register(payload)
    return MessageOut(id=user.id, message="Utilisateur créé avec succès")

# -----------------------------
# Me (profil courant)
# -----------------------------
@router.get(
    "/me",
    summary="Récupérer l'utilisateur courant",
    response_model=UserOut,
    responses={
        200: {"description": "Utilisateur courant"},
        401: {"description": "Token invalide ou expiré"},
        404: {"description": "Utilisateur introuvable"},
    },
)
def me(user: User = Depends(get_current_user)):
    return user

# -----------------------------
# Changer le mot de passe
# -----------------------------
@router.put(
    "/password",
    summary="Changer le mot de passe",
    response_model=MessageOut,
    responses={
        401: {"description": "Mot de passe actuel incorrect ou token invalide"},
        404: {"description": "Utilisateur introuvable"},
    },
)
def change_password(
    payload: ChangePasswordIn,
    user: User = Depends(get_current_user),
    svc: AuthService = Depends(get_auth_service),
):
    svc.change_password(user=user, payload=payload)
    return MessageOut(message="Mot de passe mis à jour avec succès")

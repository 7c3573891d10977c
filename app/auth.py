from fastapi import Depends, Header, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from datetime import datetime, timedelta, timezone

from . import schemas
from .core.config import settings

SECRET_KEY = settings.SECRET_KEY
ALGORITHM = settings.ALGORITHM
ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES

# auto_error=False: os endpoints públicos aceitam pedidos sem token
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token", auto_error=False)

def create_access_token(data: dict, expires_delta: timedelta | None = None):
    """Cria um novo token JWT. Os tokens reais são emitidos pelo serviço de autenticação."""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)
    return encoded_jwt

def _normalize_role(role: str) -> str:
    role = str(role).strip().upper()
    return role[len("ROLE_"):] if role.startswith("ROLE_") else role

def decode_identity(token: str) -> schemas.Identity:
    """Converte as claims do token (sub, tenant_id, roles) numa identidade já resolvida."""
    payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    roles = payload.get("roles") or []
    if isinstance(roles, str):
        roles = [roles]
    return schemas.Identity(
        user_id=payload.get("sub"),
        tenant_id=payload.get("tenant_id"),
        roles=[_normalize_role(role) for role in roles],
    )

# --- Dependências (Dependencies) ---

async def get_optional_identity(token: str | None = Depends(oauth2_scheme)) -> schemas.Identity:
    """
    Identidade do chamador, ou uma identidade anônima para chamadas públicas.
    Um token presente mas inválido é sempre rejeitado.
    """
    if not token:
        return schemas.Identity()
    try:
        return decode_identity(token)
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

async def get_current_identity(identity: schemas.Identity = Depends(get_optional_identity)) -> schemas.Identity:
    """Dependência para endpoints protegidos: exige um token válido com usuário."""
    if not identity.user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return identity

def get_tenant_id(
    identity: schemas.Identity = Depends(get_optional_identity),
    x_tenant_id: str | None = Header(default=None),
) -> str:
    """O tenant vem do token; chamadas públicas podem informá-lo no header X-Tenant-Id."""
    tenant_id = identity.tenant_id or (x_tenant_id.strip() if x_tenant_id else None)
    if not tenant_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Tenant could not be resolved for this request.",
        )
    return tenant_id

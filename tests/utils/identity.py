# tests/utils/identity.py

from faker import Faker

from app.auth import create_access_token

fake = Faker()

def identity_headers(
    *, tenant_id: str, roles: list[str] | None = None, user_id: str | None = None
) -> dict[str, str]:
    """
    Gera um token JWT como o serviço de autenticação faria e devolve
    os headers prontos para usar nas requisições.

    :param tenant_id: O tenant que o token representa.
    :param roles: Roles do usuário (ex: ["SELLER"]). Padrão: cliente comum.
    :param user_id: ID do usuário; gerado se não for informado.
    """
    token = create_access_token({
        "sub": user_id or fake.uuid4(),
        "tenant_id": tenant_id,
        "roles": roles if roles is not None else ["CUSTOMER"],
    })
    return {"Authorization": f"Bearer {token}"}

def seller_headers(tenant_id: str) -> dict[str, str]:
    return identity_headers(tenant_id=tenant_id, roles=["SELLER"])

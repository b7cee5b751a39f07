from fastapi import HTTPException

from hotel_site.core.jwt import decode_access_token

SIGN_IN_REDIRECT = {"X-Redirect": "/auth"}


def decode_token(token: str):
    payload = decode_access_token(token)

    if payload is None:
        raise HTTPException(status_code=401, detail="Sesi tidak valid atau sudah berakhir", headers=SIGN_IN_REDIRECT)

    if "sub" not in payload:
        raise HTTPException(status_code=401, detail="Invalid token payload", headers=SIGN_IN_REDIRECT)

    return payload

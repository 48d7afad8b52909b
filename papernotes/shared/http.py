from fastapi import HTTPException
from typing import Any, Optional

def err(message: str, code: str = "bad_request", status: int = 400, details: Optional[Any] = None):
    # raises so routes can short-circuit from inside except blocks
    raise HTTPException(status_code=status, detail={"ok": False, "error": {"code": code, "message": message, "details": details}})

# server/app.py
import ipaddress
from typing import Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import PlainTextResponse

from smartlocate.host import ConnectionState, StaticHost
from smartlocate.resolver import resolve_location
from smartlocate.services import select_services

app = FastAPI(title="smartlocate API")


# --------------------- helpers ---------------------
def host_from_request(request: Request) -> StaticHost:
    # ECT is the effective-connection-type client hint (4g, 3g, 2g, slow-2g)
    ect = request.headers.get("ect")
    conn = ConnectionState(effective_type=ect.lower()) if ect else None
    return StaticHost(user_agent=request.headers.get("user-agent", ""), connection=conn, sensor=None)


def public_client_ip(request: Request) -> Optional[str]:
    """Caller's address if the IP services can locate it, else None (services use their own view)."""
    if request.client is None:
        return None
    try:
        addr = ipaddress.ip_address(request.client.host)
    except ValueError:
        return None
    if not addr.is_global:
        return None
    return str(addr)


# --------------------- routes ---------------------
@app.get("/", response_class=PlainTextResponse)
def root():
    return "smartlocate API is running. Try /locate or /docs for the interactive UI."


@app.get("/health")
def health():
    return {"ok": True}


@app.get("/locate")
async def locate(
    request: Request,
    ip: Optional[str] = Query(None, description="Address to look up; defaults to the caller's"),
    services: Optional[str] = Query(None, description='Comma list of IP services, e.g. "ipinfo,ip-api"'),
):
    try:
        chosen = select_services(services.split(",") if services else None)
    except KeyError as e:
        raise HTTPException(status_code=400, detail=e.args[0])

    if ip is None:
        ip = public_client_ip(request)
    result = await resolve_location(host_from_request(request), services=chosen, ip=ip)
    return result.as_dict(json_safe=True)

from __future__ import annotations

import math

from fastapi import Depends, FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from .auth.dependencies import require_admin, require_user
from .auth.users import UsernameTakenError, authenticate, register
from .config import DEFAULT_APP_CONFIG
from .gifts.catalog import (
    CatalogError,
    GiftNotFoundError,
    add_gift,
    delete_gift,
    get_catalog,
    get_gift,
)
from .gifts.criteria import coerce_bound
from .gifts.images import ImageStorageError, delete_image, save_image
from .gifts.matcher import suggest
from .gifts.models import (
    Gift,
    GiftCreate,
    GiftCriteria,
    GiftListResponse,
    LoginRequest,
    SignupRequest,
    SuggestResponse,
)
from .gifts.parsing import parse_profile

_config = DEFAULT_APP_CONFIG

app = FastAPI(title="Gift Finder API", version="1.0.0")
app.add_middleware(SessionMiddleware, secret_key=_config.session_secret)


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    genders: set[str] = set()
    nationalities: set[str] = set()
    jobs: set[str] = set()
    for gift in get_catalog():
        genders.update(gift.criteria.genders)
        nationalities.update(gift.criteria.nationalities)
        jobs.update(gift.criteria.jobs)
    return {
        "genders": sorted(genders),
        "nationalities": sorted(nationalities),
        "jobs": sorted(jobs),
    }


# ── Auth endpoints ───────────────────────────────────────────────────────


@app.post("/auth/login")
def login(body: LoginRequest, request: Request) -> dict:
    user = authenticate(body.username, body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    request.session["user"] = user
    return {"status": "ok", "user": user}


@app.post("/auth/signup")
def signup(body: SignupRequest, request: Request) -> dict:
    try:
        user = register(body.username, body.password)
    except UsernameTakenError:
        raise HTTPException(status_code=409, detail="Username already exists")
    request.session["user"] = user
    return {"status": "ok", "user": user}


@app.post("/auth/logout")
def logout(request: Request) -> dict:
    request.session.clear()
    return {"status": "logged_out"}


@app.get("/auth/me")
def auth_me(user: dict = Depends(require_user)) -> dict:
    return user


# ── Gift endpoints ───────────────────────────────────────────────────────


@app.get("/gifts", response_model=GiftListResponse)
def list_gifts() -> GiftListResponse:
    gifts = get_catalog()
    return GiftListResponse(gifts=gifts, total=len(gifts))


@app.get("/gifts/suggest", response_model=SuggestResponse)
def suggest_gifts(
    sex: str | None = None,
    age: str | None = None,
    national: str | None = None,
    job: str | None = None,
) -> SuggestResponse:
    # Bad query values are coerced to "absent" instead of rejected
    profile = parse_profile(sex=sex, age=age, national=national, job=job)
    catalog = get_catalog()
    return SuggestResponse(
        gifts=suggest(profile, catalog),
        total_candidates=len(catalog),
        profile=profile,
    )


@app.get("/gifts/{gift_id}", response_model=Gift)
def read_gift(gift_id: str) -> Gift:
    try:
        return get_gift(gift_id)
    except GiftNotFoundError:
        raise HTTPException(status_code=404, detail="Gift not found")


# ── Admin endpoints ──────────────────────────────────────────────────────


def _parse_bound(raw: str | None, field: str) -> int | None:
    if raw is None or not raw.strip():
        return None
    value = coerce_bound(raw)
    if value is None or value < 0:
        raise HTTPException(status_code=422, detail=f"{field} must be a whole number")
    return value


@app.post("/gifts", response_model=Gift, status_code=201)
def create_gift(
    name: str = Form(...),
    description: str = Form(...),
    price: float = Form(...),
    image: UploadFile | None = File(default=None),
    image_url: str | None = Form(default=None, alias="imageUrl"),
    gender: str | None = Form(default=None),
    age_min: str | None = Form(default=None, alias="ageMin"),
    age_max: str | None = Form(default=None, alias="ageMax"),
    nationalities: str | None = Form(default=None),
    jobs: str | None = Form(default=None),
    user: dict = Depends(require_admin),
) -> Gift:
    if not name.strip() or not description.strip():
        raise HTTPException(status_code=422, detail="Name and description are required")
    if not math.isfinite(price) or price < 0:
        raise HTTPException(status_code=422, detail="Price must be a non-negative number")

    low = _parse_bound(age_min, "ageMin")
    high = _parse_bound(age_max, "ageMax")
    if low is not None and high is not None and low > high:
        raise HTTPException(status_code=422, detail="ageMin must not exceed ageMax")

    image_ref = (image_url or "").strip() or None
    uploaded = False
    if image is not None and image.filename:
        # One byte past the limit is enough for save_image to reject it
        data = image.file.read(_config.max_image_bytes + 1)
        try:
            image_ref = save_image(image.filename, image.content_type, data, config=_config)
            uploaded = True
        except ImageStorageError as exc:
            raise HTTPException(status_code=400, detail=str(exc))

    criteria = GiftCriteria(
        genders=gender,
        age_min=low,
        age_max=high,
        nationalities=nationalities,
        jobs=jobs,
    )
    try:
        return add_gift(GiftCreate(
            name=name.strip(),
            description=description.strip(),
            price=price,
            image=image_ref,
            criteria=criteria,
        ))
    except CatalogError:
        if uploaded:
            delete_image(image_ref, config=_config)
        raise HTTPException(status_code=500, detail="Could not save gift")


@app.delete("/gifts/{gift_id}")
def remove_gift(gift_id: str, user: dict = Depends(require_admin)) -> dict:
    try:
        gift = delete_gift(gift_id)
    except GiftNotFoundError:
        raise HTTPException(status_code=404, detail="Gift not found")
    except CatalogError:
        raise HTTPException(status_code=500, detail="Could not delete gift")
    delete_image(gift.image, config=_config)
    return {"status": "deleted", "id": gift.id}


# ── Uploaded images ──────────────────────────────────────────────────────


_config.upload_dir.mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=str(_config.upload_dir)), name="uploads")

"""
User profile routes.
"""
from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.schemas.user import UserResponse, ProfileUpdate
from app.models.user import User
from app.api.dependencies import get_current_user
from app.core.exceptions import NotFoundError
from app.models.city import City
from app.services import currency_service, storage_service
from app.services.validation import validate_cover_photo

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get current user information."""
    return current_user


@router.put("/me", response_model=UserResponse)
async def update_profile(
    profile: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update name, home city, preferred currency, photo or preferences."""
    updates = profile.model_dump(exclude_unset=True)

    if updates.get("home_city_id") and not db.query(City).filter(City.id == updates["home_city_id"]).first():
        raise NotFoundError("City", updates["home_city_id"])
    if updates.get("currency_id"):
        currency_service.get_currency_or_404(updates["currency_id"], db)

    for field, value in updates.items():
        setattr(current_user, field, value)

    db.commit()
    db.refresh(current_user)

    if "currency_id" in updates:
        currency_service.clear_currency_cache(current_user.id)

    return current_user


@router.post("/me/photo", response_model=UserResponse)
async def upload_profile_photo(
    file: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Upload a new avatar."""
    content = await file.read()
    validate_cover_photo(file.content_type, len(content))

    old_photo = current_user.photo
    current_user.photo = storage_service.save_file(storage_service.AVATAR_BUCKET, file.filename, content)
    db.commit()
    db.refresh(current_user)

    storage_service.delete_file(old_photo)
    return current_user

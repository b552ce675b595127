"""Public URLs for objects in the user images bucket."""
from backend.config import USER_IMAGES_BUCKET


def image_url(image: str) -> str:
    """
    Turn a stored image key into its public S3 URL.

    Full URLs and empty values are returned unchanged, as are keys when no
    bucket is configured.
    """
    if not image or not USER_IMAGES_BUCKET or image.startswith(("http://", "https://")):
        return image or ""
    return f"https://{USER_IMAGES_BUCKET}.s3.amazonaws.com/{image.lstrip('/')}"

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional, List, Dict, Any, Tuple


class ListingItem(BaseModel):
    """One business card found on a section or filter page"""

    id: int
    name: str
    logo_url: str = ""
    like_count: int = Field(default=0, ge=0)
    is_ad: bool = False
    section: str

    @property
    def key(self) -> Tuple[int, bool]:
        # Ad and organic listings of the same id are distinct entities
        return (self.id, self.is_ad)


class DetailFragment(BaseModel):
    """Best-effort fields parsed from a detail page. None means not found."""

    id: int
    name: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    neighborhood: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    google_maps_url: Optional[str] = None
    facebook_url: Optional[str] = None
    instagram_url: Optional[str] = None
    yelp_url: Optional[str] = None
    logo_url: Optional[str] = None
    gallery_urls: List[str] = Field(default_factory=list)
    banner_url: Optional[str] = None
    qr_code_url: Optional[str] = None
    description: Optional[str] = None
    order_url: Optional[str] = None


class Business(BaseModel):
    """Final normalized record written to the output artifact"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    name: str
    section: str
    address: Optional[str] = None
    city: Optional[str] = None
    neighborhood: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    poster_url: Optional[str] = None
    banner_url: Optional[str] = None
    qr_code_url: Optional[str] = None
    gallery_urls: List[str] = Field(default_factory=list)
    google_maps_url: Optional[str] = None
    facebook_url: Optional[str] = None
    instagram_url: Optional[str] = None
    yelp_url: Optional[str] = None
    description: Optional[str] = None
    # TODO: populate categories/is_hot/is_free from the filter pages a business appears on
    categories: List[str] = Field(default_factory=list)
    like_count: int = Field(default=0, ge=0)
    is_hot: bool = False
    is_free: bool = False
    is_ad: bool = False
    order_url: Optional[str] = None
    fetched_at: str

    def to_record(self) -> Dict[str, Any]:
        """camelCase dict for the JSON artifact, absent fields omitted"""
        return self.model_dump(by_alias=True, exclude_none=True)

"""
Business logic for vendors.

Vendors are always addressed by id.  Updates merge the nested
``contact`` and ``pricing`` groups field by field.
"""

from ..schemas.vendor import Vendor, VendorCreate, VendorUpdate
from .collection_service import CollectionService


class VendorService(CollectionService):
    collection = "vendors"
    item_model = Vendor
    create_model = VendorCreate
    update_model = VendorUpdate

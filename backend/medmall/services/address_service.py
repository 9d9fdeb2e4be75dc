"""User delivery addresses: default addresses first, then oldest first."""

from medmall.models.address import UserAddress
from medmall.services.base import ResourceService


class UserAddressService(ResourceService[UserAddress]):
    model = UserAddress
    resource_name = "user address"
    update_fields = (
        "consignee",
        "phone",
        "province",
        "city",
        "district",
        "address_line",
        "is_default",
    )

    def ordering(self):
        return (UserAddress.is_default.desc(), UserAddress.created_at)


user_address_service = UserAddressService()

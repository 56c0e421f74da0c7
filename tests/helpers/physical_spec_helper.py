"""
Physical specification fixtures built through the service layer
"""

from waltz.models.entity import EntityReference
from waltz.models.physical_specification import (
    DataFormatKind,
    PhysicalSpecification,
    UserTimestamp,
)
from waltz.service.physical_specification import PhysicalSpecificationService

from tests.helpers.name_helper import NameHelper


class PhysicalSpecHelper:

    def __init__(self, physical_specification_service: PhysicalSpecificationService):
        self.physical_specification_service = physical_specification_service

    def create_physical_spec(self, owning_entity: EntityReference, name: str) -> int:
        """
        Create a specification owned by ``owning_entity``.

        Args:
            owning_entity: Entity owning the specification
            name: Stem for the unique specification name and creating user;
                also used verbatim as the description

        Returns:
            Id of the new specification
        """
        user = NameHelper.mk_user_id(name)
        spec_name = NameHelper.mk_name(name)

        spec = PhysicalSpecification(
            external_id=spec_name,
            owning_entity=owning_entity,
            name=spec_name,
            description=name,
            format=DataFormatKind.UNKNOWN,
            last_updated_by=user,
            is_removed=False,
            created=UserTimestamp.mk_for_user(user),
        )

        return self.physical_specification_service.create(spec)

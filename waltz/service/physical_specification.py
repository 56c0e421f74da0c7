"""
Physical specification service
"""

from __future__ import annotations

from waltz.data.physical_specification import PhysicalSpecificationDao
from waltz.models.physical_specification import PhysicalSpecification
from waltz.utils.checks import check_not_null, check_true
from waltz.utils.errors import NotFoundError
from waltz.utils.logging import logger


class PhysicalSpecificationService:

    def __init__(self, physical_specification_dao: PhysicalSpecificationDao):
        self.physical_specification_dao = physical_specification_dao

    def create(self, spec: PhysicalSpecification) -> int:
        """
        Persist a new specification.

        Args:
            spec: Specification without an id

        Returns:
            Generated id
        """
        check_not_null(spec, "spec cannot be null")
        check_true(spec.id is None, "Cannot create a specification which already has an id")

        spec_id = self.physical_specification_dao.create(spec)
        logger.info(
            f"Created physical specification {spec_id} '{spec.name}' "
            f"for {spec.owning_entity.kind.value}/{spec.owning_entity.id}")
        return spec_id

    def get_by_id(self, spec_id: int) -> PhysicalSpecification:
        spec = self.physical_specification_dao.get_by_id(spec_id)
        if spec is None:
            raise NotFoundError(f"Physical specification not found: {spec_id}")
        return spec

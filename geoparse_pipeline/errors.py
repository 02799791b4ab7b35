"""Exceptions raised at the request boundary."""


class EmptyInputError(ValueError):
    """Request text was empty or whitespace only."""


class UnknownGeoNameIdError(KeyError):
    """Gazetteer has no record with the requested id."""

    def __init__(self, geoname_id: int):
        super().__init__(geoname_id)
        self.geoname_id = geoname_id

    def __str__(self) -> str:
        return f"Unknown GeoNames id {self.geoname_id}"

from hexworld.maps.terrain import Biome, OBSTACLE_BIOMES


class HexCell:
    def __init__(self, coordinate, height, moisture, biome, is_settlement_zone=False):

        # axial coordinate of the cell (grid key)
        self.coordinate = coordinate

        # noise-derived elevation and moisture, both in [0, 1]
        self.height = height
        self.moisture = moisture

        # the biome the cell currently renders as (water, sand, ground, ...)
        self.biome = biome

        # eligible for settlement placement and organic road growth
        self.is_settlement_zone = is_settlement_zone

        # road / building flags written by the settlement and road stages
        self.is_road = False
        self.has_building = False

        # optional SettlementType picked for a building cell by the renderer
        self.building = None

    def is_obstacle(self):
        """Water and mountain cells block settlements and organic roads."""
        return self.biome in OBSTACLE_BIOMES

    def set_road(self):
        self.is_road = True

    def set_building(self):
        # buildings always sit on walkable ground and count as road
        self.has_building = True
        self.is_road = True
        self.biome = Biome.GROUND

    def flags(self):
        """(biome, is_road, has_building) used for grid comparisons."""
        return self.biome, self.is_road, self.has_building

    def __repr__(self):
        base = f"HexCell({self.coordinate}, {self.biome.value}"
        if self.is_road:
            base += ", road"
        if self.has_building:
            base += ", building"
        return base + ")"

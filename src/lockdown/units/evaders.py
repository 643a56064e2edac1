from lockdown.units.base import AgentType, Role, SpeedRange


class Regular(AgentType):
    type_id = "regular"
    display_name = "Inmate"
    role = Role.EVADER
    speed = SpeedRange(60.0, 90.0)
    radius = 8.0


class Fast(AgentType):
    type_id = "fast"
    display_name = "Runner"
    role = Role.EVADER
    speed = SpeedRange(120.0, 150.0)
    radius = 6.0


class Strong(AgentType):
    type_id = "strong"
    display_name = "Bruiser"
    role = Role.EVADER
    speed = SpeedRange(42.0, 60.0)
    radius = 12.0


class Sneaky(AgentType):
    type_id = "sneaky"
    display_name = "Sneak"
    role = Role.EVADER
    speed = SpeedRange(72.0, 90.0)
    radius = 7.0

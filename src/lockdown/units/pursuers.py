from lockdown.units.base import AgentType, Role, SpeedRange


class Guard(AgentType):
    type_id = "guard"
    display_name = "Guard"
    role = Role.PURSUER
    speed = SpeedRange(48.0, 72.0)  # a little slower than a regular inmate
    radius = 12.0

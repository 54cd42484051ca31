from enum import Enum


class ProjectMode(str, Enum):
    STANDARD = "standard"
    PRO = "pro"


class ValueType(str, Enum):
    COST_REDUCTION = "cost_reduction"
    COST_AVOIDANCE = "cost_avoidance"
    REVENUE_INCREASE = "revenue_increase"
    NEW_REVENUE = "new_revenue"
    # Legacy forms; no resolver is registered for it.
    REVENUE_GENERATION = "revenue_generation"


class ChecklistAnswer(str, Enum):
    SIM = "sim"
    PARCIAL = "parcial"
    NAO = "nao"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Scenario(str, Enum):
    PESSIMISTIC = "pessimistic"
    REALISTIC = "realistic"
    OPTIMISTIC = "optimistic"


class InitiativeType(str, Enum):
    OPEN = "open"
    CLOSED = "closed"
    INTERNAL = "internal"
    STARTUP = "startup"


class StageGate(str, Enum):
    DISCOVERY = "discovery"
    VALIDATION = "validation"
    POC = "poc"
    SCALE = "scale"


class InnovationHorizon(str, Enum):
    H1 = "H1"
    H2 = "H2"
    H3 = "H3"


class UserRole(str, Enum):
    ADMIN = "admin"
    USER = "user"


class CompanyStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"

from typing import List, Optional

from app.schemas.auth import UserProfile

# Grants every capability when present in a profile's permissions
ALL_PERMISSIONS = "all"

# Permission ids that can be granted to a staff account
KNOWN_PERMISSIONS = {
    "all": "Full System Access",
    "students": "Student Management",
    "calendar": "Calendar Access",
    "forms": "Forms & Assessments",
    "notes": "Daily Notes",
    "attendance": "Attendance Tracking",
    "therapy": "Therapy Services",
    "assessments": "Assessment Management",
    "programs": "Program Management",
    "reports": "Reports & Analytics",
    "settings": "System Settings",
    "user_management": "User Management",
    "view_child": "View Own Child Info",
    "messages": "Messaging System",
    "calendar_view": "Calendar View Only",
}


def effective_permissions(profile: Optional[UserProfile]) -> List[str]:
    if profile is None:
        return []
    return list(profile.permissions)


def has_permission(profile: Optional[UserProfile], permission: str) -> bool:
    if profile is None:
        return False
    if ALL_PERMISSIONS in profile.permissions:
        return True
    return permission in profile.permissions


def has_role(profile: Optional[UserProfile], role: str) -> bool:
    return profile is not None and profile.role == role

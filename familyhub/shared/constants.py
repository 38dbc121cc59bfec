"""
Application-wide constants.
"""

# User roles
ROLE_PARENT = "parent"
ROLE_ADMIN = "admin"
ROLE_MEMBER = "member"
ROLE_CHILD = "child"
GUARDIAN_ROLES = (ROLE_PARENT, ROLE_ADMIN)

# Chore assignment lifecycle: pending -> completed -> verified | rejected
ASSIGNMENT_STATUS_PENDING = "pending"
ASSIGNMENT_STATUS_COMPLETED = "completed"
ASSIGNMENT_STATUS_VERIFIED = "verified"
ASSIGNMENT_STATUS_REJECTED = "rejected"
ASSIGNMENT_STATUSES = (
    ASSIGNMENT_STATUS_PENDING,
    ASSIGNMENT_STATUS_COMPLETED,
    ASSIGNMENT_STATUS_VERIFIED,
    ASSIGNMENT_STATUS_REJECTED,
)

# Chore defaults
DEFAULT_CHORE_POINTS = 10
DEFAULT_CHORE_CATEGORY = "general"
DEFAULT_CHORE_DIFFICULTY = "medium"

# Point transaction types
TRANSACTION_CHORE_PENDING = "chore_pending"
TRANSACTION_CHORE_COMPLETED = "chore_completed"
TRANSACTION_ACHIEVEMENT_UNLOCKED = "achievement_unlocked"
TRANSACTION_REWARD_REDEEMED = "reward_redeemed"

# Ledger entries that never touch the cached balance
UNSETTLED_TRANSACTION_TYPES = (TRANSACTION_CHORE_PENDING,)

# Allowance
PAYMENT_METHOD_PENDING = "pending"

# Streaks
STREAK_TYPE_DAILY = "daily"

# Notification types
NOTIFICATION_CHORE_ASSIGNED = "chore_assigned"
NOTIFICATION_CHORE_COMPLETED = "chore_completed"
NOTIFICATION_CHORE_VERIFIED = "chore_verified"
NOTIFICATION_CHORE_REJECTED = "chore_rejected"
NOTIFICATION_ACHIEVEMENT_UNLOCKED = "achievement_unlocked"
NOTIFICATION_REWARD_REDEEMED = "reward_redeemed"
NOTIFICATION_REWARD_FULFILLED = "reward_fulfilled"
NOTIFICATION_REWARD_CANCELLED = "reward_cancelled"

# Rewards
DEFAULT_REWARD_CATEGORY = "privilege"
REDEMPTION_STATUS_PENDING = "pending"
REDEMPTION_STATUS_FULFILLED = "fulfilled"
REDEMPTION_STATUS_CANCELLED = "cancelled"

# Leaderboard
LEADERBOARD_SORT_POINTS = "points"
LEADERBOARD_SORT_STREAK = "streak"

# Catalog seeded on first start when no achievements exist
DEFAULT_ACHIEVEMENTS = [
    {
        "name": "First Steps",
        "description": "Get your first chore verified",
        "icon": "star",
        "category": "chores",
        "points": 5,
        "rarity": "common",
        "unlock_condition": "chores_completed:1",
    },
    {
        "name": "Helping Hand",
        "description": "Get 10 chores verified",
        "icon": "hand",
        "category": "chores",
        "points": 20,
        "rarity": "uncommon",
        "unlock_condition": "chores_completed:10",
    },
    {
        "name": "Century",
        "description": "Reach 100 points",
        "icon": "trophy",
        "category": "points",
        "points": 10,
        "rarity": "rare",
        "unlock_condition": "points_earned:100",
    },
    {
        "name": "On a Roll",
        "description": "Keep a 7 day streak",
        "icon": "flame",
        "category": "streaks",
        "points": 25,
        "rarity": "epic",
        "unlock_condition": "streak_days:7",
    },
]

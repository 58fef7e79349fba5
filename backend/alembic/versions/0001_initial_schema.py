"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID, JSONB

# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def _base_columns() -> list:
    return [
        sa.Column("id", UUID(as_uuid=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    ]


def _user_fk(table: str, column: str = "user_id") -> sa.ForeignKeyConstraint:
    return sa.ForeignKeyConstraint(
        [column], ["users.id"], name=f"fk_{table}_{column}_users", ondelete="CASCADE"
    )


def upgrade() -> None:
    # Enum values are stored by member name
    user_role = sa.Enum("USER", "ADMIN", name="userrole")
    subscription_tier = sa.Enum("FREE", "PREMIUM", name="subscriptiontier")
    gender = sa.Enum("MALE", "FEMALE", name="gender")
    age_range = sa.Enum(
        "UNDER_25", "FROM_26_TO_35", "FROM_36_TO_45", "FROM_46_TO_55", "OVER_56", name="agerange"
    )
    experience_level = sa.Enum("BEGINNER", "INTERMEDIATE", "ADVANCED", name="experiencelevel")
    body_type = sa.Enum("SLIM", "AVERAGE", "ATHLETIC", "HEAVY", name="bodytype")
    primary_goal = sa.Enum("TONE_BODY", "BUILD_MUSCLE", name="primarygoal")
    equipment_access = sa.Enum("FULL_GYM", "BODYWEIGHT_ONLY", name="equipmentaccess")
    buddy_status = sa.Enum("PENDING", "ACCEPTED", "DECLINED", name="buddystatus")
    sticker_type = sa.Enum(
        "PROUD_OF_YOU", "SMASHED_IT", "KEEP_GOING", "LETS_GO", "FIRE", "MUSCLE", name="stickertype"
    )
    challenge_type = sa.Enum(
        "WORKOUT_COUNT", "TOTAL_VOLUME", "STREAK", "SPECIFIC_EXERCISE", name="challengetype"
    )
    plan_type = sa.Enum("STANDARD", "STUDENT", "ANNUAL", name="plantype")
    billing_period = sa.Enum("MONTHLY", "ANNUAL", name="billingperiod")
    discount_type = sa.Enum("PERCENTAGE", "FIXED", name="discounttype")
    media_kind = sa.Enum("VIDEO", "PHOTO", name="mediakind")
    media_category = sa.Enum("EXERCISE", "WORKOUT", "BEFORE", name="mediacategory")

    op.create_table(
        "users",
        *_base_columns(),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("is_verified", sa.Boolean(), nullable=False),
        sa.Column("role", user_role, nullable=False),
        sa.Column("full_name", sa.String(length=200), nullable=True),
        sa.Column("subscription_tier", subscription_tier, nullable=False),
        sa.Column("trial_end_date", sa.Date(), nullable=True),
        sa.Column("stripe_customer_id", sa.String(length=100), nullable=True),
        sa.Column("stripe_subscription_id", sa.String(length=100), nullable=True),
        sa.Column("subscription_status", sa.String(length=50), nullable=True),
        sa.Column("cancelled_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("cancellation_reason", sa.String(length=50), nullable=True),
        sa.Column("cancellation_comment", sa.Text(), nullable=True),
        sa.Column("buddy_promo_applied", sa.Boolean(), nullable=False),
        sa.Column("student_verified", sa.Boolean(), nullable=False),
        sa.Column("student_email", sa.String(length=255), nullable=True),
        sa.Column("student_verified_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("student_verification_code", sa.String(length=6), nullable=True),
        sa.Column("student_verification_email", sa.String(length=255), nullable=True),
        sa.Column("student_verification_expires", sa.DateTime(timezone=True), nullable=True),
        sa.Column("before_photo_url", sa.Text(), nullable=True),
        sa.Column("before_photo_date", sa.Date(), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_stripe_customer_id", "users", ["stripe_customer_id"])

    op.create_table(
        "coaches",
        *_base_columns(),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("specialty", sa.String(length=200), nullable=True),
        sa.Column("photo_url", sa.Text(), nullable=True),
        sa.Column("intro_video_url", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_coaches"),
    )

    op.create_table(
        "user_profiles",
        *_base_columns(),
        sa.Column("user_id", UUID(as_uuid=True), nullable=False),
        sa.Column("gender", gender, nullable=False),
        sa.Column("age_range", age_range, nullable=False),
        sa.Column("experience_level", experience_level, nullable=False),
        sa.Column("body_type", body_type, nullable=False),
        sa.Column("target_zone", JSONB, nullable=False),
        sa.Column("primary_goal", primary_goal, nullable=False),
        sa.Column("available_days", JSONB, nullable=False),
        sa.Column("preferred_coach_id", UUID(as_uuid=True), nullable=True),
        sa.Column("equipment_access", equipment_access, nullable=False),
        sa.Column("workout_duration_preference", sa.Integer(), nullable=True),
        sa.Column("current_rotation_cycle", sa.Integer(), nullable=False),
        sa.Column("last_rotation_date", sa.Date(), nullable=True),
        sa.Column("declined_current_rotation", sa.Boolean(), nullable=False),
        _user_fk("user_profiles"),
        sa.ForeignKeyConstraint(
            ["preferred_coach_id"], ["coaches.id"],
            name="fk_user_profiles_preferred_coach_id_coaches", ondelete="SET NULL",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_user_profiles"),
        sa.UniqueConstraint("user_id", name="uq_user_profiles_user_id"),
    )

    op.create_table(
        "exercises",
        *_base_columns(),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("exercise_code", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("target_goal", JSONB, nullable=False),
        sa.Column("equipment_needed", JSONB, nullable=False),
        sa.Column("experience_level", JSONB, nullable=False),
        sa.Column("target_zones", JSONB, nullable=False),
        sa.Column("stats_to_display", JSONB, nullable=False),
        sa.Column("default_sets", sa.Integer(), nullable=False),
        sa.Column("default_reps", sa.String(length=20), nullable=False),
        sa.Column("default_rest_seconds", sa.Integer(), nullable=False),
        sa.Column("video_url", sa.Text(), nullable=True),
        sa.Column("coach_videos", JSONB, nullable=False),
        sa.Column("is_unilateral", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_exercises"),
    )
    op.create_index("ix_exercises_exercise_code", "exercises", ["exercise_code"], unique=True)

    op.create_table(
        "workout_templates",
        *_base_columns(),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("target_goal", sa.String(length=50), nullable=True),
        sa.Column("target_zones", JSONB, nullable=False),
        sa.Column("equipment_needed", sa.String(length=50), nullable=True),
        sa.Column("fitness_level", sa.String(length=50), nullable=True),
        sa.Column("duration_minutes", sa.Integer(), nullable=False),
        sa.Column("muscle_group", sa.String(length=100), nullable=True),
        sa.Column("exercises", JSONB, nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("template_group", sa.String(length=100), nullable=True),
        sa.Column("version_number", sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_workout_templates"),
    )
    op.create_index("ix_workout_templates_target_goal", "workout_templates", ["target_goal"])
    op.create_index("ix_workout_templates_template_group", "workout_templates", ["template_group"])

    op.create_table(
        "app_settings",
        *_base_columns(),
        sa.Column("setting_key", sa.String(length=100), nullable=False),
        sa.Column("setting_value", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_app_settings"),
    )
    op.create_index("ix_app_settings_setting_key", "app_settings", ["setting_key"], unique=True)

    op.create_table(
        "workout_schedules",
        *_base_columns(),
        sa.Column("user_id", UUID(as_uuid=True), nullable=False),
        sa.Column("week_start_date", sa.Date(), nullable=False),
        sa.Column("workouts", JSONB, nullable=False),
        _user_fk("workout_schedules"),
        sa.PrimaryKeyConstraint("id", name="pk_workout_schedules"),
        sa.UniqueConstraint("user_id", "week_start_date", name="uq_workout_schedules_user_id"),
    )
    op.create_index("ix_workout_schedules_user_id", "workout_schedules", ["user_id"])
    op.create_index("ix_workout_schedules_week_start_date", "workout_schedules", ["week_start_date"])

    op.create_table(
        "workout_logs",
        *_base_columns(),
        sa.Column("user_id", UUID(as_uuid=True), nullable=False),
        sa.Column("workout_name", sa.String(length=200), nullable=False),
        sa.Column("muscle_group", sa.String(length=100), nullable=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("duration_minutes", sa.Integer(), nullable=False),
        sa.Column("total_volume", sa.Float(), nullable=False),
        _user_fk("workout_logs"),
        sa.PrimaryKeyConstraint("id", name="pk_workout_logs"),
    )
    op.create_index("ix_workout_logs_user_id", "workout_logs", ["user_id"])
    op.create_index("ix_workout_logs_date", "workout_logs", ["date"])

    op.create_table(
        "exercise_logs",
        *_base_columns(),
        sa.Column("log_id", UUID(as_uuid=True), nullable=False),
        sa.Column("exercise_name", sa.String(length=200), nullable=False),
        sa.Column("exercise_code", sa.String(length=100), nullable=True),
        sa.Column("sets_completed", sa.Integer(), nullable=False),
        sa.Column("reps_per_set", sa.Integer(), nullable=True),
        sa.Column("weight_kg", sa.Float(), nullable=True),
        sa.Column("video_url", sa.Text(), nullable=True),
        sa.Column("template_url", sa.Text(), nullable=True),
        sa.Column("order_index", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ["log_id"], ["workout_logs.id"],
            name="fk_exercise_logs_log_id_workout_logs", ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_exercise_logs"),
    )
    op.create_index("ix_exercise_logs_log_id", "exercise_logs", ["log_id"])

    op.create_table(
        "workout_buddies",
        *_base_columns(),
        sa.Column("user_id", UUID(as_uuid=True), nullable=False),
        sa.Column("buddy_email", sa.String(length=255), nullable=False),
        sa.Column("buddy_user_id", UUID(as_uuid=True), nullable=True),
        sa.Column("status", buddy_status, nullable=False),
        _user_fk("workout_buddies"),
        _user_fk("workout_buddies", "buddy_user_id"),
        sa.PrimaryKeyConstraint("id", name="pk_workout_buddies"),
    )
    op.create_index("ix_workout_buddies_user_id", "workout_buddies", ["user_id"])
    op.create_index("ix_workout_buddies_buddy_email", "workout_buddies", ["buddy_email"])
    op.create_index("ix_workout_buddies_buddy_user_id", "workout_buddies", ["buddy_user_id"])

    op.create_table(
        "buddy_messages",
        *_base_columns(),
        sa.Column("from_user_id", UUID(as_uuid=True), nullable=False),
        sa.Column("to_user_id", UUID(as_uuid=True), nullable=False),
        sa.Column("message_type", sticker_type, nullable=False),
        sa.Column("custom_message", sa.String(length=280), nullable=True),
        sa.Column("is_read", sa.Boolean(), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        _user_fk("buddy_messages", "from_user_id"),
        _user_fk("buddy_messages", "to_user_id"),
        sa.PrimaryKeyConstraint("id", name="pk_buddy_messages"),
    )
    op.create_index("ix_buddy_messages_from_user_id", "buddy_messages", ["from_user_id"])
    op.create_index("ix_buddy_messages_to_user_id", "buddy_messages", ["to_user_id"])
    op.create_index("ix_buddy_messages_expires_at", "buddy_messages", ["expires_at"])

    op.create_table(
        "challenges",
        *_base_columns(),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("challenge_type", challenge_type, nullable=False),
        sa.Column("exercise_name", sa.String(length=200), nullable=True),
        sa.Column("target_value", sa.Float(), nullable=False),
        sa.Column("reward_points", sa.Integer(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_challenges"),
    )

    op.create_table(
        "challenge_participants",
        *_base_columns(),
        sa.Column("challenge_id", UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", UUID(as_uuid=True), nullable=False),
        sa.Column("progress", sa.Float(), nullable=False),
        sa.Column("completed", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(
            ["challenge_id"], ["challenges.id"],
            name="fk_challenge_participants_challenge_id_challenges", ondelete="CASCADE",
        ),
        _user_fk("challenge_participants"),
        sa.PrimaryKeyConstraint("id", name="pk_challenge_participants"),
        sa.UniqueConstraint(
            "challenge_id", "user_id", name="uq_challenge_participants_challenge_id"
        ),
    )
    op.create_index(
        "ix_challenge_participants_challenge_id", "challenge_participants", ["challenge_id"]
    )
    op.create_index("ix_challenge_participants_user_id", "challenge_participants", ["user_id"])

    op.create_table(
        "user_stats",
        *_base_columns(),
        sa.Column("user_id", UUID(as_uuid=True), nullable=False),
        sa.Column("total_workouts", sa.Integer(), nullable=False),
        sa.Column("total_volume", sa.Float(), nullable=False),
        sa.Column("current_streak", sa.Integer(), nullable=False),
        sa.Column("longest_streak", sa.Integer(), nullable=False),
        sa.Column("points", sa.Integer(), nullable=False),
        sa.Column("last_workout_date", sa.Date(), nullable=True),
        _user_fk("user_stats"),
        sa.PrimaryKeyConstraint("id", name="pk_user_stats"),
        sa.UniqueConstraint("user_id", name="uq_user_stats_user_id"),
    )
    op.create_index("ix_user_stats_points", "user_stats", ["points"])

    op.create_table(
        "achievements",
        *_base_columns(),
        sa.Column("user_id", UUID(as_uuid=True), nullable=False),
        sa.Column("achievement_type", sa.String(length=50), nullable=False),
        sa.Column("earned_date", sa.Date(), nullable=False),
        _user_fk("achievements"),
        sa.PrimaryKeyConstraint("id", name="pk_achievements"),
        sa.UniqueConstraint("user_id", "achievement_type", name="uq_achievements_user_id"),
    )
    op.create_index("ix_achievements_user_id", "achievements", ["user_id"])

    op.create_table(
        "pricing_configs",
        *_base_columns(),
        sa.Column("plan_type", plan_type, nullable=False),
        sa.Column("plan_name", sa.String(length=200), nullable=False),
        sa.Column("price_monthly", sa.Float(), nullable=False),
        sa.Column("price_total", sa.Float(), nullable=True),
        sa.Column("stripe_price_id", sa.String(length=100), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("billing_period", billing_period, nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_pricing_configs"),
    )
    op.create_index("ix_pricing_configs_plan_type", "pricing_configs", ["plan_type"])

    op.create_table(
        "special_offers",
        *_base_columns(),
        sa.Column("offer_name", sa.String(length=200), nullable=False),
        sa.Column("discount_type", discount_type, nullable=False),
        sa.Column("discount_value", sa.Float(), nullable=False),
        sa.Column("applies_to_plans", JSONB, nullable=False),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("promo_code", sa.String(length=50), nullable=True),
        sa.Column("stripe_coupon_id", sa.String(length=100), nullable=True),
        sa.Column("banner_text", sa.String(length=300), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_special_offers"),
    )
    op.create_index("ix_special_offers_promo_code", "special_offers", ["promo_code"])

    op.create_table(
        "media_assets",
        *_base_columns(),
        sa.Column("user_id", UUID(as_uuid=True), nullable=False),
        sa.Column("kind", media_kind, nullable=False),
        sa.Column("category", media_category, nullable=False),
        sa.Column("file_path", sa.Text(), nullable=False),
        sa.Column("file_url", sa.Text(), nullable=False),
        sa.Column("content_type", sa.String(length=100), nullable=True),
        sa.Column("size_bytes", sa.Integer(), nullable=False),
        sa.Column("workout_log_id", UUID(as_uuid=True), nullable=True),
        sa.Column("exercise_name", sa.String(length=200), nullable=True),
        _user_fk("media_assets"),
        sa.ForeignKeyConstraint(
            ["workout_log_id"], ["workout_logs.id"],
            name="fk_media_assets_workout_log_id_workout_logs", ondelete="SET NULL",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_media_assets"),
    )
    op.create_index("ix_media_assets_user_id", "media_assets", ["user_id"])


def downgrade() -> None:
    for table in (
        "media_assets",
        "special_offers",
        "pricing_configs",
        "achievements",
        "user_stats",
        "challenge_participants",
        "challenges",
        "buddy_messages",
        "workout_buddies",
        "exercise_logs",
        "workout_logs",
        "workout_schedules",
        "app_settings",
        "workout_templates",
        "exercises",
        "user_profiles",
        "coaches",
        "users",
    ):
        op.drop_table(table)

    bind = op.get_bind()
    for enum_name in (
        "mediacategory",
        "mediakind",
        "discounttype",
        "billingperiod",
        "plantype",
        "challengetype",
        "stickertype",
        "buddystatus",
        "equipmentaccess",
        "primarygoal",
        "bodytype",
        "experiencelevel",
        "agerange",
        "gender",
        "subscriptiontier",
        "userrole",
    ):
        sa.Enum(name=enum_name).drop(bind, checkfirst=True)

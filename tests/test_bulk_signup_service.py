"""
Unit tests for BulkSignupService
"""

import pytest
from supabase import AuthApiError, AuthError

from school_auth.models.schemas import BulkSignupUser, UserRole
from school_auth.services.bulk_signup_service import BulkSignupService


def users(count):
    return [
        BulkSignupUser(email=f"user{n}@school.ir", full_name=f"User {n}", password="s3cret-pass")
        for n in range(1, count + 1)
    ]


class TestBulkSignupService:
    @pytest.mark.asyncio
    async def test_all_items_succeed(self, gateway):
        outcome = await BulkSignupService(gateway).signup_users(users(3), UserRole.TEACHER)

        assert outcome.success is True
        assert outcome.successCount == 3
        assert outcome.errors == []
        assert [r.id for r in outcome.results] == ["user-1", "user-2", "user-3"]
        assert [r.email for r in outcome.results] == ["user1@school.ir", "user2@school.ir", "user3@school.ir"]
        assert gateway.insert_teacher.await_count == 3
        gateway.delete_auth_user.assert_not_called()

    @pytest.mark.asyncio
    async def test_auth_user_gets_confirmed_email_and_metadata(self, gateway):
        await BulkSignupService(gateway).signup_users(users(1), UserRole.PARENT)

        gateway.create_auth_user.assert_awaited_once_with(
            "user1@school.ir", "s3cret-pass", metadata={"full_name": "User 1"}
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("role", [UserRole.ADMIN, UserRole.PARENT])
    async def test_teacher_record_only_for_teachers(self, gateway, role):
        outcome = await BulkSignupService(gateway).signup_users(users(2), role)

        assert outcome.successCount == 2
        gateway.insert_teacher.assert_not_called()
        assert gateway.insert_role.await_args_list[0].args == ("user-1", role.value)

    @pytest.mark.asyncio
    async def test_existing_profile_primary_key_is_tolerated(self, gateway, api_error):
        gateway.insert_profile.side_effect = api_error(
            "23505", 'duplicate key value violates unique constraint "profiles_pkey"'
        )

        outcome = await BulkSignupService(gateway).signup_users(users(1), UserRole.TEACHER)

        assert outcome.success is True
        assert outcome.successCount == 1
        gateway.insert_role.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_duplicate_profile_email_rolls_back_once(self, gateway, api_error):
        gateway.insert_profile.side_effect = api_error(
            "23505", 'duplicate key value violates unique constraint "profiles_email_key"'
        )

        outcome = await BulkSignupService(gateway).signup_users(users(1), UserRole.TEACHER)

        assert outcome.success is False
        assert outcome.successCount == 0
        assert outcome.errors == [
            "(ردیف 1: user1@school.ir) - خطا در ساخت پروفایل: "
            "ایمیل 'user1@school.ir' از قبل در جدول پروفایل‌ها وجود دارد."
        ]
        gateway.delete_auth_user.assert_awaited_once_with("user-1")
        gateway.insert_role.assert_not_called()

    @pytest.mark.asyncio
    async def test_later_step_failure_deletes_only_that_user(self, gateway, api_error):
        gateway.insert_teacher.side_effect = [None, api_error("23503", "fk violation"), None]

        outcome = await BulkSignupService(gateway).signup_users(users(3), UserRole.TEACHER)

        assert outcome.success is False
        assert outcome.successCount == 2
        assert [r.id for r in outcome.results] == ["user-1", "user-3"]
        assert outcome.errors == ["(ردیف 2: user2@school.ir) - خطا در ساخت رکورد معلم: fk violation"]
        gateway.delete_auth_user.assert_awaited_once_with("user-2")

    @pytest.mark.asyncio
    async def test_already_registered_email_skips_rollback(self, gateway):
        gateway.create_auth_user.side_effect = [
            AuthApiError("A user with this email address has already been registered", 422, "email_exists"),
            "user-2",
        ]

        outcome = await BulkSignupService(gateway).signup_users(users(2), UserRole.PARENT)

        assert outcome.successCount == 1
        assert outcome.errors == ["(ردیف 1: user1@school.ir): ایمیل قبلا در سیستم احراز هویت ثبت شده است."]
        gateway.delete_auth_user.assert_not_called()
        assert gateway.insert_profile.await_count == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        AuthApiError("Email address already registered by another user", 422, None),
        AuthApiError("duplicate key value violates unique constraint \"users_email_key\"", 500, None),
        AuthApiError("Conflict", 422, "email_exists"),
    ])
    async def test_email_taken_variants(self, gateway, error):
        gateway.create_auth_user.side_effect = error

        outcome = await BulkSignupService(gateway).signup_users(users(1), UserRole.PARENT)

        assert outcome.errors == ["(ردیف 1: user1@school.ir): ایمیل قبلا در سیستم احراز هویت ثبت شده است."]

    @pytest.mark.asyncio
    async def test_auth_database_error_message(self, gateway):
        gateway.create_auth_user.side_effect = AuthApiError(
            "Database error creating new user", 500, "unexpected_failure"
        )

        outcome = await BulkSignupService(gateway).signup_users(users(1), UserRole.PARENT)

        assert outcome.errors == [
            "(ردیف 1: user1@school.ir) - خطای پایگاه داده هنگام ایجاد کاربر Auth: "
            "Database error creating new user"
        ]

    @pytest.mark.asyncio
    async def test_null_role_message(self, gateway, api_error):
        gateway.insert_role.side_effect = api_error(
            "23502", 'null value in column "role" violates not-null constraint'
        )

        outcome = await BulkSignupService(gateway).signup_users(users(1), UserRole.PARENT)

        assert outcome.errors == [
            "(ردیف 1: user1@school.ir) - خطا در تخصیص نقش: مقدار نقش (role) نامعتبر یا null ارسال شده است."
        ]
        gateway.delete_auth_user.assert_awaited_once_with("user-1")

    @pytest.mark.asyncio
    async def test_generic_role_error_names_the_role(self, gateway, api_error):
        gateway.insert_role.side_effect = api_error("42501", "permission denied")

        outcome = await BulkSignupService(gateway).signup_users(users(1), UserRole.ADMIN)

        assert outcome.errors == ["(ردیف 1: user1@school.ir) - خطا در تخصیص نقش 'admin': permission denied"]

    @pytest.mark.asyncio
    async def test_failed_rollback_is_reported(self, gateway, api_error):
        gateway.insert_profile.side_effect = api_error("42501", "permission denied")
        gateway.delete_auth_user.side_effect = AuthError("User not found", "user_not_found")

        outcome = await BulkSignupService(gateway).signup_users(users(1), UserRole.TEACHER)

        assert outcome.errors == [
            "(ردیف 1: user1@school.ir) - خطا در ساخت پروفایل: permission denied",
            "(ردیف 1: user1@school.ir) - استثنا در حین بازگردانی عملیات: User not found",
        ]
        gateway.delete_auth_user.assert_awaited_once_with("user-1")

    @pytest.mark.asyncio
    async def test_unexpected_error_is_isolated_to_item(self, gateway):
        gateway.insert_role.side_effect = [RuntimeError("connection reset"), None]

        outcome = await BulkSignupService(gateway).signup_users(users(2), UserRole.PARENT)

        assert outcome.successCount == 1
        assert outcome.errors == ["(ردیف 1: user1@school.ir) - connection reset"]
        gateway.delete_auth_user.assert_awaited_once_with("user-1")

    @pytest.mark.asyncio
    async def test_temp_student_name_is_carried_into_results(self, gateway):
        rows = [
            BulkSignupUser(
                email="parent@school.ir",
                full_name="Parent",
                password="s3cret-pass",
                temp_student_name="Ali",
            )
        ]

        outcome = await BulkSignupService(gateway).signup_users(rows, UserRole.PARENT)

        assert outcome.to_payload()["results"] == [
            {"email": "parent@school.ir", "id": "user-1", "temp_student_name": "Ali"}
        ]

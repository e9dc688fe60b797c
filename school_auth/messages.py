"""
User-facing messages

Persian strings are shown to school staff in the dashboard; the English ones
are kept as-is because existing clients match on them.
"""

# Configuration
SERVER_MISCONFIGURED = "پیکربندی سرور ناقص است. لطفاً با مدیر سیستم تماس بگیرید."

# General
GENERAL_FAILURE = "خطای کلی در فانکشن: {detail}"

# Single signup
SIGNUP_FIELDS_REQUIRED = "Email, password, and full name are required."
SIGNUP_AUTH_ERROR = "Auth Error: {detail}"
SIGNUP_USER_NOT_CREATED = "Failed to create user."
SIGNUP_PROFILE_ERROR = "Profile Error: {detail}"
SIGNUP_ROLE_ERROR = "Role Error: {detail}"
SIGNUP_TEACHER_ERROR = "Teacher Error: {detail}"

# Login
LOGIN_FIELDS_REQUIRED = "نام کاربری و رمز عبور الزامی است."
LOGIN_INVALID_CREDENTIALS = "نام کاربری یا رمز عبور اشتباه است."

# Bulk signup: request level
MISSING_TOKEN = "Unauthorized - Missing authentication token"
INVALID_TOKEN = "Unauthorized - Invalid token"
ADMIN_REQUIRED = "Forbidden - Admin access required"
RATE_LIMITED = "درخواست‌های بیش از حد. لطفاً {minutes} دقیقه صبر کنید و دوباره تلاش کنید."
VALIDATION_FAILED = "Input validation failed"

# Bulk signup: per item, always prefixed with ROW_PREFIX
ROW_PREFIX = "(ردیف {row}: {email})"
AUTH_EMAIL_TAKEN = "{prefix}: ایمیل قبلا در سیستم احراز هویت ثبت شده است."
AUTH_DATABASE_ERROR = "{prefix} - خطای پایگاه داده هنگام ایجاد کاربر Auth: {detail}"
AUTH_CREATE_FAILED = "{prefix} - خطا در ساخت کاربر Auth: {detail}"
PROFILE_EMAIL_TAKEN = "{prefix} - خطا در ساخت پروفایل: ایمیل '{email}' از قبل در جدول پروفایل‌ها وجود دارد."
PROFILE_CREATE_FAILED = "{prefix} - خطا در ساخت پروفایل: {detail}"
ROLE_NULL = "{prefix} - خطا در تخصیص نقش: مقدار نقش (role) نامعتبر یا null ارسال شده است."
ROLE_ASSIGN_FAILED = "{prefix} - خطا در تخصیص نقش '{role}': {detail}"
TEACHER_CREATE_FAILED = "{prefix} - خطا در ساخت رکورد معلم: {detail}"
ROLLBACK_FAILED = "{prefix} - استثنا در حین بازگردانی عملیات: {detail}"
UNEXPECTED_ITEM_ERROR = "{prefix} - {detail}"

# Schema validation
INVALID_EMAIL = "Invalid email format"
EMAIL_TOO_LONG = "Email too long"
FULL_NAME_REQUIRED = "Full name is required"
FULL_NAME_TOO_LONG = "Full name too long"
PASSWORD_TOO_SHORT = "Password must be at least 8 characters"
PASSWORD_TOO_LONG = "Password too long"
USERS_EMPTY = "At least one user required"
USERS_TOO_MANY = "Maximum {limit} users per request"
INVALID_USER_TYPE = "Invalid user type"

"""RevCart account registration, login, OTP verification and password reset."""

class Messages:
    MISSING_NAME = "Please enter your first and last name."
    INVALID_GUESTS = "Invalid number of guests (1-6)."
    MISSING_ATTENDING = "Please let us know whether you will attend."

    LOCAL_ONLY = "Test mode: nothing was sent, your RSVP is saved on this device."
    SUBMITTING = "Sending..."
    SUCCESS = "Thank you! Your RSVP has been sent."
    BACKEND_NOT_CONNECTED = (
        "Backend is not connected yet (POST /api/rsvp). Your RSVP is saved on this device."
    )

    SERVER_ERROR = "Server error. Please try again."
    SEND_FAILED = "Failed to send. Please try again."

"""EventSnap: admission checks for photos uploaded to time-boxed events."""

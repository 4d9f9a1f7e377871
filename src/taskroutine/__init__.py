"""taskroutine - to-do list with date bucketing and one-shot reminders."""

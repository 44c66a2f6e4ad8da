from prometheus_client import Counter

received_commands = Counter('commands_received', 'Count number of commands received.', ['command', ])
completed_commands = Counter('commands_completed', 'Count number of commands completed.', ['command', ])
errored_commands = Counter('commands_errored', 'Count number of commands errored.', ['command', ])

punishments_applied = Counter('punishments_applied', 'Count punishments the platform accepted.', ['punishment', ])
punishments_failed = Counter('punishments_failed', 'Count punishments the platform rejected.', ['punishment', ])
audit_write_failures = Counter(
    'audit_write_failures', 'Count punishment attempts that could not be written to the audit log.'
)

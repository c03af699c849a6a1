"""Completion-ring primitives: records, one-shot completions, a ticket queue and in-flight storage."""
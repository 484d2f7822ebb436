"""
Task subsystem.

Components:
- task_models.py: value types (Instant, Task, MenuRow) and day/time parsing
- task_store.py: primary store (instant -> task) + tag inverted index
- merge.py: linear ordered-set merges (intersect/union/difference)
- expression.py: boolean tag expressions (parser + evaluator)
- menu.py: positional cursor over the last query result
"""

"""
Task Registry Module.

In-memory, thread-safe store for tasks.

```python
from task_registry import TaskRegistry

registry = TaskRegistry()
task = registry.create("Buy milk")
registry.get_by_id(task.id)
```
"""

from .models import Task
from .registry import TaskRegistry


__all__ = [
    "Task",
    "TaskRegistry",
]

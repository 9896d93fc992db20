# algoprep/services/interview/mock_problems.py
# Placeholder problems used to pad an interview that could not be filled from the store.
import time
from typing import Dict, List, Optional, Sequence

MOCK_INTERVIEW_PREFIX = "mock-interview"
MOCK_PROBLEM_PREFIX = "mock-"
FULL_SET = 3

TOPIC_LABELS: Dict[str, str] = {
    "arrays": "Arrays",
    "strings": "Strings",
    "linked_lists": "Linked Lists",
    "trees": "Trees",
    "graphs": "Graphs",
    "dynamic_programming": "Dynamic Programming",
    "sorting": "Sorting",
    "searching": "Searching",
    "recursion": "Recursion",
    "backtracking": "Backtracking",
}

MOCK_PROBLEMS_BY_TOPIC: Dict[str, List[Dict[str, str]]] = {
    "arrays": [
        {
            "title": "Two Sum",
            "description": (
                "Given an array of integers `nums` and an integer `target`, return indices of the "
                "two numbers in the array such that they add up to `target`.\n\n"
                "You may assume that each input would have exactly one solution, and you may not "
                "use the same element twice.\n\n"
                "Example 1:\nInput: nums = [2,7,11,15], target = 9\nOutput: [0,1]\n"
                "Explanation: Because nums[0] + nums[1] == 9, we return [0, 1]."
            ),
            "template": (
                "def solve(nums, target):\n    # Your solution here\n"
                "    # Return indices of two numbers that sum to target\n    pass"
            ),
        },
        {
            "title": "Maximum Subarray",
            "description": (
                "Given an integer array `nums`, find the subarray with the largest sum, and return "
                "its sum.\n\nExample 1:\nInput: nums = [-2,1,-3,4,-1,2,1,-5,4]\nOutput: 6\n"
                "Explanation: The subarray [4,-1,2,1] has the largest sum 6."
            ),
            "template": "def solve(nums):\n    # Your solution here\n    # Return maximum subarray sum\n    pass",
        },
    ],
    "strings": [
        {
            "title": "Valid Palindrome",
            "description": (
                "A phrase is a palindrome if, after converting all uppercase letters into lowercase "
                "letters and removing all non-alphanumeric characters, it reads the same forward "
                "and backward.\n\nExample 1:\nInput: s = 'A man, a plan, a canal: Panama'\n"
                "Output: true\nExplanation: 'amanaplanacanalpanama' is a palindrome."
            ),
            "template": (
                "def solve(s):\n    # Your solution here\n"
                "    # Return true if s is a palindrome, false otherwise\n    pass"
            ),
        },
    ],
    "linked_lists": [
        {
            "title": "Reverse Linked List",
            "description": (
                "Given the head of a singly linked list, reverse the list, and return the reversed "
                "list.\n\nExample 1:\nInput: head = [1,2,3,4,5]\nOutput: [5,4,3,2,1]"
            ),
            "template": (
                "class ListNode:\n    def __init__(self, val=0, next=None):\n"
                "        self.val = val\n        self.next = next\n\n"
                "def solve(head):\n    # Your solution here\n"
                "    # Return head of reversed linked list\n    pass"
            ),
        },
    ],
    "trees": [
        {
            "title": "Maximum Depth of Binary Tree",
            "description": (
                "Given the root of a binary tree, return its maximum depth. A binary tree's "
                "maximum depth is the number of nodes along the longest path from the root node "
                "down to the farthest leaf node.\n\n"
                "Example 1:\nInput: root = [3,9,20,null,null,15,7]\nOutput: 3"
            ),
            "template": (
                "class TreeNode:\n    def __init__(self, val=0, left=None, right=None):\n"
                "        self.val = val\n        self.left = left\n        self.right = right\n\n"
                "def solve(root):\n    # Your solution here\n"
                "    # Return maximum depth of the tree\n    pass"
            ),
        },
    ],
    "graphs": [
        {
            "title": "Number of Islands",
            "description": (
                "Given an m x n 2D binary grid `grid` which represents a map of '1's (land) and "
                "'0's (water), return the number of islands. An island is surrounded by water and "
                "is formed by connecting adjacent lands horizontally or vertically.\n\n"
                "Example 1:\nInput: grid = [\n  ['1','1','1','1','0'],\n  ['1','1','0','1','0'],\n"
                "  ['1','1','0','0','0'],\n  ['0','0','0','0','0']\n]\nOutput: 1"
            ),
            "template": "def solve(grid):\n    # Your solution here\n    # Return number of islands\n    pass",
        },
    ],
}

GENERIC_TEMPLATE = "def solve(input):\n    # Your solution here\n    pass"


def now_ms() -> int:
    return int(time.time() * 1000)


def is_mock_problem_id(value: str) -> bool:
    return str(value).startswith(MOCK_PROBLEM_PREFIX)


def is_mock_interview_id(value: str) -> bool:
    return str(value).startswith(MOCK_INTERVIEW_PREFIX)


def topic_label(topic: str, names: Optional[Dict[str, str]] = None) -> str:
    return (names or {}).get(topic) or TOPIC_LABELS.get(topic) or topic


def default_template(title: str) -> str:
    return f"def solve(input):\n    # Your solution here for: {title}\n    pass"


def mock_interview_id(topics: Sequence[str], ts: Optional[int] = None) -> str:
    ts = ts if ts is not None else now_ms()
    suffix = "-" + "-".join(topics) if topics else ""
    return f"{MOCK_INTERVIEW_PREFIX}-{ts}{suffix}"


def topics_from_mock_id(interview_id: str) -> List[str]:
    # mock-interview-<ms>-<topic>-<topic>...; topic ids use "_", never "-"
    return interview_id.split("-")[3:]


def build_mock_problems(
    topics: Sequence[str],
    count: int,
    difficulty: str,
    names: Optional[Dict[str, str]] = None,
    ts: Optional[int] = None,
) -> List[Dict[str, str]]:
    """`count` placeholder problems, cycling through `topics`."""
    if count <= 0:
        return []
    ts = ts if ts is not None else now_ms()
    topics = list(topics) or ["general"]

    problems = []
    for index in range(count):
        topic = topics[index % len(topics)]
        label = topic_label(topic, names)
        catalog = MOCK_PROBLEMS_BY_TOPIC.get(topic, [])
        # each pass over the topics takes the next catalog entry, then placeholders
        lap = index // len(topics)
        if lap < len(catalog):
            entry = catalog[lap]
        else:
            entry = {
                "title": f"{label} Problem {index + 1}",
                "description": (
                    f"This is a mock {difficulty} difficulty problem for {label}. "
                    "Implement a solution that solves the problem efficiently."
                ),
                "template": GENERIC_TEMPLATE,
            }
        problems.append({
            "id": f"{MOCK_PROBLEM_PREFIX}{index}-{ts}",
            "title": entry["title"],
            "description": entry["description"],
            "difficulty": difficulty,
            "template": entry["template"],
        })
    return problems



def regenerate_mock_problems(topics: Sequence[str], ts: Optional[int] = None) -> List[Dict[str, str]]:
    """
    Placeholders for a mock interview reloaded from its id: one per topic
    (at most three), the topic's position picking its catalog entry.
    """
    ts = ts if ts is not None else now_ms()

    problems = []
    for index, topic in enumerate(list(topics)[:FULL_SET]):
        label = topic_label(topic)
        catalog = MOCK_PROBLEMS_BY_TOPIC.get(topic, [])
        if catalog:
            entry = catalog[index % len(catalog)]
        else:
            entry = {
                "title": f"{label} Problem {index + 1}",
                "description": f"This is a mock problem for {label}. Implement a solution that solves the problem efficiently.",
                "template": GENERIC_TEMPLATE,
            }
        problems.append({
            "id": f"{MOCK_PROBLEM_PREFIX}{index}-{ts}",
            "title": entry["title"],
            "description": entry["description"],
            "difficulty": "medium",
            "template": entry["template"],
        })
    return problems


def pad_to_full_set(
    questions: List[Dict[str, str]],
    topics: Sequence[str],
    difficulty: str,
    names: Optional[Dict[str, str]] = None,
    ts: Optional[int] = None,
) -> List[Dict[str, str]]:
    missing = FULL_SET - len(questions)
    return questions + build_mock_problems(topics, missing, difficulty, names, ts)

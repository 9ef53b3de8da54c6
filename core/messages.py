"""
English texts for every message key the structures and controllers emit.

Structures report keys plus parameters; turning them into text is left to
whoever displays them (the output panel, the status line, message boxes).
Keys that are not in the catalog are shown verbatim, which is how raw
traversal output lines travel.
"""

from typing import Any, Dict, Optional

MESSAGES: Dict[str, str] = {
    # status line
    "status.animation": "Animation in progress...",
    "status.centering": "Centering in progress...",

    # input validation
    "errors.emptyInput": "Input cannot be empty!",
    "errors.onlyDigits": "Input must contain digits only!",
    "errors.max3Digits": "Maximum 3 digits!",
    "errors.max3Chars": "Maximum 3 characters!",
    "errors.inputNumber": "Enter a number!",
    "errors.biggerThanZero": "Number must be greater than 0!",
    "errors.lessThanHundred": "Number must be smaller than 100!",

    # lists
    "list.getFirstValue": "GetFirst(L): Value of the first node is {value}.",
    "list.getFirstError": "GetFirst(L): ERROR – the list is empty!",
    "list.getLastValue": "GetLast(L): Value of the last node is {value}.",
    "list.getLastError": "GetLast(L): ERROR – the list is empty!",
    "list.getActiveValue": "GetValue(L): Value of the active node is {value}.",
    "list.getActiveError": "GetValue(L): ERROR – the list is not active!",
    "list.notActive": "IsActive(L): False (the list is not active).",
    "list.active": "IsActive(L): True (the list is active).",
    "list.deleteFirstEmpty": "DeleteFirst(L): No action - attempting to delete the first element from an empty list.",
    "list.deleteAfterEmpty": "DeleteAfter(L): No action - attempt to delete a non-existent element after the active element.",
    "list.deleteLastEmpty": "DeleteLast(L): No action - attempting to delete the last element from an empty list.",
    "list.deleteBeforeEmpty": "DeleteBefore(L): No action - attempting to delete the element before the active one from an empty list.",
    "list.firstEmpty": "First(L): No action - the list is empty.",
    "list.lastEmpty": "Last(L): No action - the list is empty.",
    "list.setActiveValue": "SetValue(L): The value of the active element has been changed to {value}.",

    # stack
    "stack.top": "Top(S): The value of the top element of the stack is {value}.",
    "stack.topError": "Top(S): ERROR – the stack is empty!",
    "stack.empty": "IsEmpty(S): True (the stack is empty).",
    "stack.notEmpty": "IsEmpty(S): False (the stack is not empty).",
    "stack.full": "IsFull(S): True (the stack is full).",
    "stack.notFull": "IsFull(S): False (the stack is not full).",
    "stack.addFull": "Push(S, El): No action - attempting to add an element to a full stack.",
    "stack.removeEmpty": "Pop(S): No action - attempting to remove an element from an empty stack.",

    # queue
    "queue.front": "Front(Q): Value of the first element in the queue is {value}.",
    "queue.frontError": "Front(Q): ERROR – the queue is empty!",
    "queue.empty": "IsEmpty(Q): True (the queue is empty).",
    "queue.notEmpty": "IsEmpty(Q): False (the queue is not empty).",
    "queue.full": "IsFull(Q): True (the queue is full).",
    "queue.notFull": "IsFull(Q): False (the queue is not full).",
    "queue.addFull": "Add(Q, El): No action - attempting to add an element to a full queue.",
    "queue.removeEmpty": "Remove(Q): No action - attempting to remove an element from an empty queue.",

    # tree
    "tree.searchFound": "Search(T, K): True (a node with key {key} exists in the tree).",
    "tree.searchNotFound": "Search(T, K): False (a node with key {key} does not exist in the tree).",
    "tree.height": "Height(T): The height of the tree is {height}.",
    "tree.deleteEmpty": "Delete(T, K): No action - attempting to delete a node from an empty tree.",
    "tree.deleteNotFound": "Delete(T, K): No action - a node with key {key} does not exist in the tree.",
}


def format_message(key: str, params: Optional[Dict[str, Any]] = None) -> str:
    template = MESSAGES.get(key)
    if template is None:
        return key
    if not params:
        return template
    return template.format(**params)

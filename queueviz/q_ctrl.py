from arrayviz.arr_ctrl import ArrayController
from queueviz.q_structure import Queue


class QueueController(ArrayController):
    TITLE = "Queue"
    STRUCTURE_CLS = Queue
    ADD_LABEL = "Enqueue"
    REMOVE_LABEL = "Dequeue"
    PEEK_LABEL = "Front"

#!/usr/bin/env python3
"""
Simple matrixops demo

Builds two matrices in code, runs each operator on them and prints the reports.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from matrixops import Matrix, Operation, Operator, dumps_operation

a = Matrix.from_rows([[1, 2], [3, 4]])
b = Matrix.from_rows([[5, 6], [7, 8]])

for operator in Operator:
    op = Operation(a, operator, b)
    op.compute_and_store()
    print(op)

print("Scaled by 3:")
print(3 * a)

print("As JSON:")
print(dumps_operation(Operation(a, Operator.MULTIPLY, b)))

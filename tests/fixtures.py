"""
Test fixtures for Pattern-Viz.

This module provides sample JavaScript and TypeScript snippets
for testing the analyzer.
"""

# Nested function > conditional > loop
NESTED_CONSTRUCTS = "function f(){ if (x) { for(;;){} } }"

MALFORMED = "function f( {"

EMPTY = ""

DUPLICATE_FUNCTIONS = """
function handler() { return 1; }
function handler() { return 2; }
"""

CLASS_WITH_METHODS = """
class Calculator extends Base {
  constructor(value) {
    super();
    this.value = value;
  }

  add(x) {
    this.value += x;
    return this.value;
  }
}
"""

VARIABLES = """
const answer = 42;
let first = 1, second = 2;
var legacy;
"""

IMPORTS = """
import React from "react";
import { useState } from 'react';
const fs = require("fs");
"""

ARROW_FUNCTIONS = """
const add = (a, b) => a + b;
const square = function (n) { return n * n; };
"""

LOOPS = """
for (let i = 0; i < 10; i++) {}
for (const item of items) {}
for (const key in object) {}
while (running) { tick(); }
do { step(); } while (pending);
"""

CONDITIONALS = """
if (a) {
  one();
} else if (b) {
  two();
} else {
  three();
}
switch (mode) {
  case 1:
    break;
}
const sign = n > 0 ? 1 : -1;
"""

COMMENTS_ONLY = """
// nothing to see here
/* still nothing */
"""

MIXED_PROGRAM = """
import { parse } from "./parser";

const LIMIT = 10;

class Queue {
  push(item) {
    if (this.items.length >= LIMIT) {
      throw new Error("full");
    }
    this.items.push(item);
  }

  drain(callback) {
    while (this.items.length) {
      callback(this.items.shift());
    }
  }
}

function main(args) {
  const queue = new Queue();
  for (const arg of args) {
    queue.push(parse(arg));
  }
  queue.drain((item) => console.log(item));
}
"""

TYPESCRIPT_TYPES = """
interface Shape {
  area(): number;
}

type Id = string;

enum Color { Red, Green }

class Circle implements Shape {
  radius: number = 1;
  area(): number { return 3.14 * this.radius * this.radius; }
}
"""

TSX_COMPONENT = """
function Greeting(props: { name: string }) {
  return <h1>Hello {props.name}</h1>;
}
"""


def deep_chain(depth: int) -> str:
    """A chain of ``depth`` nested if statements."""
    return "if (x) {" * depth + "}" * depth

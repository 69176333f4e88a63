#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# core/template.py - ERB-style template rendering with a restricted evaluator
#
# Copyright (c) 2025, modbuild contributors
# All rights reserved.
#

import ast
import inspect
from typing import Mapping

from .errors import TemplateEvaluationError
from .translation_utils import _

_TAG_OPEN = "<%"
_TAG_CLOSE = "%>"
_LITERAL_OPEN = "<%%"

_COMPARISONS = {
    ast.Is: lambda left, right: left is right,
    ast.IsNot: lambda left, right: left is not right,
    ast.Eq: lambda left, right: left == right,
    ast.NotEq: lambda left, right: left != right,
}

# Python < 3.9 wraps subscripts in ast.Index
_AST_INDEX = getattr(ast, "Index", None)


def build_context(resolved) -> dict:
    """Returns the names a template can use for a ResolvedVersionSet"""
    context = {
        "platform_version": resolved.platform_version,
        "platform_version_min": resolved.platform_version_min,
        "platform_version_max": resolved.platform_version_max,
        "package_version": resolved.package_version,
        "repository_descriptor": resolved.repository_descriptor,
    }
    # Names used by existing KSP mod templates
    context.update({
        "ksp_version": resolved.platform_version,
        "ksp_version_min": resolved.platform_version_min,
        "ksp_version_max": resolved.platform_version_max,
        "mod_version": resolved.package_version,
        "git_version": resolved.repository_descriptor,
    })
    return context


def format_value(value) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class _Evaluator:
    """Evaluates one expression tree against a fixed set of names"""

    def __init__(self, context: Mapping):
        self.context = context

    def evaluate(self, node):
        method = getattr(self, f"_eval_{type(node).__name__}", None)
        if method is None:
            raise TemplateEvaluationError(_("unsupported syntax: {0}").format(type(node).__name__))
        return method(node)

    def _eval_Expression(self, node):
        value = self.evaluate(node.body)
        if inspect.ismethod(value):
            return self._call(value, [], {})
        return value

    def _eval_Constant(self, node):
        return node.value

    def _eval_Name(self, node):
        if node.id not in self.context:
            raise TemplateEvaluationError(_("undefined name '{0}'").format(node.id))
        return self.context[node.id]

    def _eval_Tuple(self, node):
        return tuple(self.evaluate(element) for element in node.elts)

    def _attribute(self, node):
        target = self.evaluate(node.value)
        if node.attr.startswith("_"):
            raise TemplateEvaluationError(_("access to '{0}' is not allowed").format(node.attr))
        try:
            return getattr(target, node.attr)
        except AttributeError:
            raise TemplateEvaluationError(
                _("'{0}' has no attribute '{1}'").format(type(target).__name__, node.attr)
            ) from None

    def _eval_Attribute(self, node):
        value = self._attribute(node)
        # Accessors may be written without parentheses: ksp_version.major
        if inspect.ismethod(value):
            return self._call(value, [], {})
        return value

    def _eval_Call(self, node):
        if isinstance(node.func, ast.Attribute):
            func = self._attribute(node.func)
        else:
            func = self.evaluate(node.func)
        if not callable(func):
            raise TemplateEvaluationError(_("'{0}' is not callable").format(type(func).__name__))

        args = []
        for arg in node.args:
            if isinstance(arg, ast.Starred):
                raise TemplateEvaluationError(_("unsupported syntax: Starred"))
            args.append(self.evaluate(arg))
        kwargs = {}
        for keyword in node.keywords:
            if keyword.arg is None:
                raise TemplateEvaluationError(_("unsupported syntax: **kwargs"))
            kwargs[keyword.arg] = self.evaluate(keyword.value)
        return self._call(func, args, kwargs)

    def _call(self, func, args, kwargs):
        try:
            return func(*args, **kwargs)
        except Exception as e:
            name = getattr(func, "__name__", type(func).__name__)
            raise TemplateEvaluationError(_("bad call to {0}(): {1}").format(name, e)) from None

    def _eval_Subscript(self, node):
        target = self.evaluate(node.value)
        key_node = node.slice
        if _AST_INDEX is not None and isinstance(key_node, _AST_INDEX):
            key_node = key_node.value
        key = self.evaluate(key_node)
        try:
            return target[key]
        except Exception as e:
            raise TemplateEvaluationError(_("bad subscript: {0}").format(e)) from None

    def _eval_Compare(self, node):
        left = self.evaluate(node.left)
        for op, comparator in zip(node.ops, node.comparators):
            compare = _COMPARISONS.get(type(op))
            if compare is None:
                raise TemplateEvaluationError(_("unsupported comparison: {0}").format(type(op).__name__))
            right = self.evaluate(comparator)
            if not compare(left, right):
                return False
            left = right
        return True

    def _eval_UnaryOp(self, node):
        operand = self.evaluate(node.operand)
        if isinstance(node.op, ast.Not):
            return not operand
        if isinstance(node.op, ast.USub) and isinstance(operand, (int, float)) and not isinstance(operand, bool):
            return -operand
        raise TemplateEvaluationError(_("unsupported operator: {0}").format(type(node.op).__name__))

    def _eval_BoolOp(self, node):
        is_and = isinstance(node.op, ast.And)
        value = None
        for operand in node.values:
            value = self.evaluate(operand)
            if bool(value) != is_and:
                return value
        return value


class TemplateRenderer:
    """Renders ERB-style templates.

    Supported tags::

        <%= expr %>    substituted with the value of expr
        <%= expr -%>   same, and drops the newline right after the tag
        <%# text %>    comment, removed
        <%%            a literal "<%"

    Expressions use Python syntax but may only reference names from the
    context mapping. Any failure raises TemplateEvaluationError and nothing
    is returned.
    """

    def render(self, template_text: str, context: Mapping) -> str:
        names = dict(context)
        output = []
        pos = 0

        while True:
            start = template_text.find(_TAG_OPEN, pos)
            if start < 0:
                output.append(template_text[pos:])
                break

            output.append(template_text[pos:start])
            if template_text.startswith(_LITERAL_OPEN, start):
                output.append(_TAG_OPEN)
                pos = start + len(_LITERAL_OPEN)
                continue

            end = template_text.find(_TAG_CLOSE, start + len(_TAG_OPEN))
            if end < 0:
                line = template_text.count("\n", 0, start) + 1
                raise TemplateEvaluationError(_("unterminated tag on line {0}").format(line))

            body = template_text[start + len(_TAG_OPEN):end]
            pos = end + len(_TAG_CLOSE)

            if body.endswith("-"):
                body = body[:-1]
                if template_text.startswith("\r\n", pos):
                    pos += 2
                elif template_text.startswith("\n", pos):
                    pos += 1

            if body.startswith("#"):
                continue
            if not body.startswith("="):
                raise TemplateEvaluationError(
                    _("only expression tags are supported: '<%{0}%>'").format(body.strip())
                )
            output.append(format_value(self.evaluate(body[1:].strip(), names)))

        return "".join(output)

    def evaluate(self, expression: str, context: Mapping):
        """Evaluates a single expression against *context*"""
        try:
            tree = ast.parse(expression, mode="eval")
        except SyntaxError as e:
            raise TemplateEvaluationError(
                _("invalid expression '{0}': {1}").format(expression, e.msg)
            ) from None

        try:
            return _Evaluator(context).evaluate(tree)
        except TemplateEvaluationError as e:
            raise TemplateEvaluationError(
                _("error in template expression '{0}': {1}").format(expression, e)
            ) from None
        except Exception as e:
            raise TemplateEvaluationError(
                _("error in template expression '{0}': {1}: {2}").format(expression, type(e).__name__, e)
            ) from None


def render(template_text: str, context: Mapping) -> str:
    return TemplateRenderer().render(template_text, context)

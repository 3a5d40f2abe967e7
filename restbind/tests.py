"""

    restbind.tests -- test suite
    ============================

"""

from unittest import TestCase
from webob import Request, Response
from webob.exc import HTTPForbidden, HTTPConflict, HTTPGone

from restbind import Endpoint, RouteGroup, Trace, URLPattern
from restbind import RouteConfigurationError
from restbind import POST, GET, PUT, DELETE
from restbind.app import Application
from restbind.crud import crud, paths, Binder
from restbind.exc import (
    NoURLPatternMatched, RouteGuarded, MethodNotAllowed, RouteReversalError,
    InvalidRoutePattern, InvalidResource)
from restbind.outcome import EMPTY, Present, as_outcome, aggregate
from restbind.resource import Resource, Binding, capabilities, bindings
from restbind.utils import split_ids

__all__ = ()

class TestRouting(TestCase):

    def assertNoMatch(self, r, url, method='GET'):
        req = Request.blank(url, {'REQUEST_METHOD': method})
        self.assertRaises(NoURLPatternMatched, r, req)

class TestURLPattern(TestCase):

    def test_exact(self):
        p = URLPattern('/blas')
        self.assertEqual(p.labels, [])
        self.assertEqual(p.match('/blas'), ('', {}))
        self.assertEqual(p.match('/blas/5'), ('/5', {}))
        self.assertRaises(NoURLPatternMatched, p.match, '/bla')
        self.assertRaises(NoURLPatternMatched, p.match, '/blasfoo')

    def test_placeholders(self):
        p = URLPattern('/tenants/{tenant}/users/{userId}')
        self.assertEqual(p.labels, ['tenant', 'userId'])
        self.assertEqual(
            p.match('/tenants/acme/users/5,6'),
            ('', {'tenant': 'acme', 'userId': '5,6'}))
        self.assertRaises(NoURLPatternMatched, p.match, '/tenants//users/5')

    def test_reverse(self):
        p = URLPattern('/tenants/{tenant}/users/{id}')
        self.assertEqual(p.reverse('acme', 5), '/tenants/acme/users/5')
        self.assertRaises(RouteReversalError, p.reverse, 'acme')
        self.assertEqual(URLPattern('/blas').reverse(), '/blas')

    def test_duplicate_labels(self):
        self.assertRaises(InvalidRoutePattern, URLPattern, '/{id}/{id}')

class TestEndpoint(TestRouting):

    def test_match(self):
        r = Endpoint(GET, 'target', 'blas/{id}')
        tr = r(Request.blank('/blas/5'))
        self.assertEqual((tr.kwargs, tr.target), ({'id': '5'}, 'target'))
        tr = r(Request.blank('/blas/5/'))
        self.assertEqual(tr.kwargs, {'id': '5'})

    def test_no_match(self):
        r = Endpoint(GET, 'target', 'blas/{id}')
        self.assertNoMatch(r, '/blas')
        self.assertNoMatch(r, '/blas/5/6')

    def test_without_pattern(self):
        r = Endpoint(POST, 'target')
        self.assertEqual(r(Request.blank('/', {'REQUEST_METHOD': 'POST'})).target,
                         'target')
        self.assertNoMatch(r, '/5', 'POST')

    def test_method(self):
        r = Endpoint(PUT, 'target', 'blas')
        with self.assertRaises(MethodNotAllowed):
            r(Request.blank('/blas', {'REQUEST_METHOD': 'DELETE'}))
        self.assertNoMatch(r, '/blas', 'DELETE')

    def test_guards_in_order(self):
        seen = []
        def first(request, trace):
            seen.append(('first', trace.kwargs['id']))
        def second(request, trace):
            seen.append(('second', trace.kwargs['id']))
        r = Endpoint(GET, 'target', '{id}', guards=[first, second])
        r(Request.blank('/5'))
        self.assertEqual(seen, [('first', '5'), ('second', '5')])

    def test_guard_replaces_trace(self):
        def guard(request, trace):
            return Trace(dict(trace.kwargs, user='fred'), trace.routes)
        r = Endpoint(GET, 'target', '{id}', guards=[guard])
        tr = r(Request.blank('/5'))
        self.assertEqual(tr.kwargs, {'id': '5', 'user': 'fred'})

    def test_guard_raises_response(self):
        seen = []
        def deny(request, trace):
            raise HTTPForbidden()
        def after(request, trace):
            seen.append('after')
        r = Endpoint(GET, 'target', guards=[deny, after])
        with self.assertRaises(RouteGuarded) as ctx:
            r(Request.blank('/'))
        self.assertIsInstance(ctx.exception.response, HTTPForbidden)
        self.assertEqual(seen, [])

    def test_guard_returns_response(self):
        seen = []
        def deny(request, trace):
            return Response(status=401)
        def after(request, trace):
            seen.append('after')
        r = Endpoint(GET, 'target', guards=[deny, after])
        with self.assertRaises(RouteGuarded) as ctx:
            r(Request.blank('/'))
        self.assertEqual(ctx.exception.response.status_code, 401)
        self.assertEqual(seen, [])

    def test_guard_returns_garbage(self):
        r = Endpoint(GET, 'target', guards=[lambda request, trace: 42])
        self.assertRaises(RouteConfigurationError, r, Request.blank('/'))

class TestRouteGroup(TestRouting):

    def test_match(self):
        r = RouteGroup([
            Endpoint(GET, 'read'),
            Endpoint(POST, 'create'),
            Endpoint(GET, 'read_by_id', '{id}'),
            ], 'tenants/{tenant}/blas')
        tr = r(Request.blank('/tenants/acme/blas/5'))
        self.assertEqual(tr.target, 'read_by_id')
        self.assertEqual(tr.kwargs, {'tenant': 'acme', 'id': '5'})
        self.assertEqual(len(tr.routes), 2)
        tr = r(Request.blank('/tenants/acme/blas', {'REQUEST_METHOD': 'POST'}))
        self.assertEqual(tr.target, 'create')

    def test_method_mismatch_is_no_match(self):
        r = RouteGroup([Endpoint(GET, 'read')], 'blas')
        self.assertNoMatch(r, '/blas', 'POST')
        self.assertNoMatch(r, '/foos')

    def test_nested(self):
        r = RouteGroup([
            RouteGroup([Endpoint(GET, 'blas')], 'blas'),
            RouteGroup([Endpoint(GET, 'foos')], 'foos'),
            ])
        self.assertEqual(r(Request.blank('/foos')).target, 'foos')

    def test_reverse(self):
        r = RouteGroup([
            RouteGroup([
                Endpoint(GET, 'read', name='read-blas'),
                Endpoint(GET, 'read_by_id', '{id}', name='read_by_id-blas'),
                ], 'blas'),
            Endpoint(GET, 'root', name='root'),
            ])
        self.assertEqual(r.reverse('read-blas'), '/blas')
        self.assertEqual(r.reverse('read-blas', q='x'), '/blas?q=x')
        self.assertEqual(r.reverse('read_by_id-blas', '5,6'), '/blas/5,6')
        self.assertEqual(r.reverse('root'), '/')
        self.assertRaises(RouteReversalError, r.reverse, 'delete-blas')

    def test_duplicate_names(self):
        r = RouteGroup([
            Endpoint(GET, 'a', 'a', name='news'),
            Endpoint(GET, 'b', 'b', name='news'),
            ])
        self.assertRaises(RouteConfigurationError, r.reverse, 'news')

class TestPaths(TestCase):

    def test_prefixes_slash(self):
        self.assertEqual(paths('blas'), ('/blas', '/blas/{id}', 'id'))

    def test_keeps_slash(self):
        self.assertEqual(paths('/blas'), ('/blas', '/blas/{id}', 'id'))

    def test_explicit_placeholder(self):
        self.assertEqual(
            paths('blas/:blaId'), ('/blas', '/blas/{blaId}', 'blaId'))

    def test_placeholder_in_the_middle(self):
        self.assertEqual(
            paths('/blas/:blaId/items'),
            ('/blas/items', '/blas/items/{blaId}', 'blaId'))

    def test_default_id_param(self):
        self.assertEqual(
            paths('blas', id_param='key'), ('/blas', '/blas/{key}', 'key'))

    def test_trailing_slash(self):
        self.assertEqual(paths('blas/'), ('/blas', '/blas/{id}', 'id'))

    def test_root(self):
        self.assertEqual(paths('/'), ('/', '/{id}', 'id'))

    def test_nested(self):
        self.assertEqual(
            paths('tenants/{tenant}/users'),
            ('/tenants/{tenant}/users', '/tenants/{tenant}/users/{id}', 'id'))

    def test_invalid_placeholders(self):
        self.assertRaises(InvalidRoutePattern, paths, 'a/:x/:y')
        self.assertRaises(InvalidRoutePattern, paths, 'a/:')
        self.assertRaises(InvalidRoutePattern, paths, 'a/:1x')

class TestResource(TestCase):

    def test_capabilities_from_object(self):
        class R(object):
            def read(self, query):
                pass
            create = None
        res = capabilities(R())
        self.assertIsNotNone(res.read)
        self.assertIsNone(res.create)
        self.assertIsNone(res.delete)

    def test_capabilities_from_mapping(self):
        op = lambda id, query: None
        res = capabilities({'readById': op, 'update': None})
        self.assertIs(res.read_by_id, op)
        self.assertIsNone(res.update)

    def test_capabilities_invalid(self):
        self.assertRaises(InvalidResource, capabilities, None)
        self.assertRaises(InvalidResource, capabilities, 'blas')
        self.assertRaises(InvalidResource, capabilities, {'read': 42})

    def test_bindings(self):
        op = lambda *a: None
        self.assertEqual(bindings(Resource()), [])
        self.assertEqual(
            bindings(Resource(delete=op, create=op, read_by_id=op)),
            [Binding(POST, False, 'create'),
             Binding(GET, True, 'read_by_id'),
             Binding(DELETE, True, 'delete')])
        self.assertEqual(
            [b.operation for b in bindings(Resource(*([op] * 5)))],
            ['create', 'read', 'read_by_id', 'update', 'delete'])

class TestOutcome(TestCase):

    def test_as_outcome(self):
        self.assertIs(as_outcome(None), EMPTY)
        self.assertEqual(as_outcome([]), Present([]))
        self.assertEqual(as_outcome(0), Present(0))
        self.assertIs(as_outcome(EMPTY), EMPTY)

    def test_aggregate(self):
        self.assertIs(aggregate([None]), EMPTY)
        self.assertEqual(aggregate([{}]), Present({}))
        self.assertEqual(aggregate([None, None]), Present([None, None]))
        self.assertEqual(
            aggregate([Present(1), EMPTY, 3]), Present([1, None, 3]))

    def test_responses(self):
        self.assertEqual(EMPTY.to_response().status_code, 204)
        resp = Present({'a': 1}).to_response()
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.content_type, 'application/json')
        self.assertEqual(resp.json_body, {'a': 1})

    def test_split_ids(self):
        self.assertEqual(split_ids('5'), ['5'])
        self.assertEqual(split_ids('6,7,1'), ['6', '7', '1'])
        self.assertEqual(split_ids('5,,6'), ['5', '', '6'])
        self.assertEqual(split_ids('5;6', ';'), ['5', '6'])

class FakeResource(object):
    """ Resource which records calls and answers with ``responses``"""

    def __init__(self):
        self.calls = []
        self.responses = {
            'create': {},
            'read': [{}],
            'read_by_id': {},
            'update': {},
            'delete': None,
        }

    def _record(self, name, *args):
        self.calls.append((name,) + args)
        response = self.responses[name]
        if callable(response):
            return response(*args)
        return response

    def create(self, query, model):
        return self._record('create', query, model)

    def read(self, query):
        return self._record('read', query)

    def read_by_id(self, id, query):
        return self._record('read_by_id', id, query)

    def update(self, id, query, model):
        return self._record('update', id, query, model)

    def delete(self, id, query):
        return self._record('delete', id, query)

class TestCRUD(TestCase):

    def setUp(self):
        self.app = Application()
        self.binder = crud(self.app)
        self.resource = FakeResource()

    def request(self, method, url, json=None):
        req = Request.blank(url, {'REQUEST_METHOD': method})
        if json is not None:
            req.content_type = 'application/json'
            req.json_body = json
        return req.get_response(self.app)

    def operations(self):
        return [c[0] for c in self.resource.calls]

class TestBind(TestCRUD):

    def test_attaches_binder(self):
        self.assertIsInstance(self.binder, Binder)
        self.assertIs(self.app.crud, self.binder)
        self.assertTrue(callable(self.app.crud))

    def test_expects_route_as_string(self):
        with self.assertRaisesRegex(InvalidRoutePattern,
                                    'route expected as string'):
            self.app.crud(None, self.resource)
        self.assertRaises(RouteConfigurationError,
                          self.app.crud, '', self.resource)
        self.assertRaises(RouteConfigurationError,
                          self.app.crud, 42, self.resource)

    def test_expects_resource_object(self):
        with self.assertRaisesRegex(InvalidResource,
                                    'expected resource Object'):
            self.app.crud('blas', None)
        self.assertRaises(InvalidResource, self.app.crud, 'blas')

    def test_expects_callable_guards(self):
        self.assertRaises(RouteConfigurationError,
                          self.app.crud, 'blas', 'guard', self.resource)

    def test_unexpected_options(self):
        self.assertRaises(TypeError,
                          self.app.crud, 'blas', self.resource, colour='red')

    def test_not_prefix_with_slash(self):
        self.app.crud('/blas', self.resource)
        self.assertEqual(self.request('GET', '/blas').status_code, 200)

    def test_prefix_with_slash(self):
        self.app.crud('blas', self.resource)
        self.assertEqual(self.request('GET', '/blas').status_code, 200)

    def test_default_param_name(self):
        group = self.app.crud('blas', self.resource)
        self.assertEqual(self.request('GET', '/blas/5').status_code, 200)
        self.assertEqual(self.resource.calls, [('read_by_id', '5', {})])
        self.assertEqual(group.routes[2].pattern.labels, ['id'])

    def test_configurable_param_name(self):
        group = self.app.crud('blas/:blaId', self.resource)
        self.assertEqual(self.request('GET', '/blas/5').status_code, 200)
        self.assertEqual(self.resource.calls, [('read_by_id', '5', {})])
        self.assertEqual(group.routes[2].pattern.labels, ['blaId'])

    def test_binder_id_param(self):
        binder = Binder(self.app, id_param='key')
        binder.bind('blas', self.resource)
        self.assertEqual(self.app.reverse('read_by_id-blas', 5), '/blas/5')
        self.assertEqual(self.request('PUT', '/blas/5').status_code, 200)

    def test_separator(self):
        crud(self.app, separator=';')
        self.app.crud('blas', self.resource)
        self.request('DELETE', '/blas/5;6')
        self.assertEqual(
            [c[1] for c in self.resource.calls], ['5', '6'])

    def test_query_forwarded(self):
        self.app.crud('blas', self.resource)
        self.request('GET', '/blas?q=fred&tag=a&tag=b')
        self.assertEqual(
            self.resource.calls,
            [('read', {'q': 'fred', 'tag': ['a', 'b']})])

    def test_nested_collection(self):
        self.app.crud('tenants/{tenant}/users', self.resource)
        self.assertEqual(
            self.request('GET', '/tenants/acme/users/5').status_code, 200)
        self.assertEqual(self.resource.calls, [('read_by_id', '5', {})])
        self.assertEqual(
            self.request('GET', '/tenants/acme/users').status_code, 200)

    def test_root_path(self):
        self.app.crud('/', self.resource)
        self.assertEqual(self.request('GET', '/').status_code, 200)
        self.assertEqual(self.request('GET', '/5').status_code, 200)
        self.assertEqual(self.operations(), ['read', 'read_by_id'])

    def test_unmatched_path(self):
        self.app.crud('blas', self.resource)
        self.assertEqual(self.request('GET', '/foos').status_code, 404)
        self.assertEqual(self.request('GET', '/blas/5/6').status_code, 404)
        self.assertEqual(self.resource.calls, [])

    def test_no_operations(self):
        self.assertIsNone(self.app.crud('blas', object()))
        self.assertEqual(self.request('GET', '/blas').status_code, 404)

    def test_several_resources(self):
        other = FakeResource()
        other.responses['read'] = [{'name': 'other'}]
        self.app.crud('blas', self.resource)
        self.app.crud('foos', other)
        resp = self.request('GET', '/foos')
        self.assertEqual(resp.json_body, [{'name': 'other'}])
        self.assertEqual(self.resource.calls, [])

    def test_capabilities_checked_once(self):
        self.resource.create = None
        self.app.crud('blas', self.resource)
        del self.resource.create
        self.assertEqual(self.request('POST', '/blas').status_code, 404)

    def test_route_names(self):
        self.app.crud('blas', self.resource)
        self.app.crud('foos', self.resource, name='foo')
        self.assertEqual(self.app.reverse('read-blas'), '/blas')
        self.assertEqual(self.app.reverse('read-blas', q='x'), '/blas?q=x')
        self.assertEqual(
            self.app.reverse('read_by_id-blas', '5,6'), '/blas/5,6')
        self.assertEqual(self.app.reverse('delete-foo', 7), '/foos/7')
        self.assertRaises(RouteReversalError, self.app.reverse, 'read-foos')

class TestMiddleware(TestCRUD):

    def test_runs_before_operation(self):
        seen = []
        def middleware(request, trace):
            seen.append('middleware')
            request.test = 5
            request.GET['owner'] = 'fred'
        self.resource.responses['read'] = \
            lambda query: seen.append(query) or []
        self.app.crud('blas', middleware, self.resource)
        resp = self.request('GET', '/blas')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(seen, ['middleware', {'owner': 'fred'}])

    def test_request_state_visible(self):
        def middleware(request, trace):
            request.environ['restbind.test'] = 5
        def read(query):
            return [{'name': 'fred'}]
        class Adapter(Binder.adapter_cls):
            def __call__(self, request, trace):
                seen.append(request.environ.get('restbind.test'))
                return super(Adapter, self).__call__(request, trace)
        seen = []
        binder = Binder(self.app)
        binder.adapter_cls = Adapter
        binder.bind('blas', middleware, {'read': read})
        resp = self.request('GET', '/blas')
        self.assertEqual(resp.json_body[0]['name'], 'fred')
        self.assertEqual(seen, [5])

    def test_runs_in_order(self):
        seen = []
        def first(request, trace):
            seen.append('first')
        def second(request, trace):
            seen.append('second')
        self.app.crud('blas', first, second, self.resource)
        self.request('DELETE', '/blas/5')
        self.assertEqual(seen, ['first', 'second'])

    def test_short_circuit(self):
        seen = []
        def deny(request, trace):
            raise HTTPForbidden()
        def after(request, trace):
            seen.append('after')
        self.app.crud('blas', deny, after, self.resource)
        self.assertEqual(self.request('GET', '/blas').status_code, 403)
        self.assertEqual(self.request('PUT', '/blas/5').status_code, 403)
        self.assertEqual(seen, [])
        self.assertEqual(self.resource.calls, [])

    def test_returned_response_short_circuits(self):
        seen = []
        def deny(request, trace):
            return Response(status=401)
        def after(request, trace):
            seen.append('after')
        self.app.crud('blas', deny, after, self.resource)
        self.assertEqual(self.request('GET', '/blas').status_code, 401)
        self.assertEqual(self.request('DELETE', '/blas/5').status_code, 401)
        self.assertEqual(seen, [])
        self.assertEqual(self.resource.calls, [])

    def test_not_run_for_unbound_operation(self):
        seen = []
        def middleware(request, trace):
            seen.append('middleware')
        self.resource.create = None
        self.app.crud('blas', middleware, self.resource)
        self.assertEqual(self.request('POST', '/blas').status_code, 404)
        self.assertEqual(seen, [])

    def test_sees_identifier(self):
        seen = []
        def middleware(request, trace):
            seen.append(trace.kwargs['blaId'])
        self.app.crud('blas/:blaId', middleware, self.resource)
        self.request('GET', '/blas/5,6')
        self.assertEqual(seen, ['5,6'])

class TestCreate(TestCRUD):

    def test_not_routed_when_absent(self):
        self.resource.create = None
        self.app.crud('blas', self.resource)
        self.assertEqual(self.request('POST', '/blas').status_code, 404)
        self.assertEqual(self.resource.calls, [])

    def test_routed(self):
        self.resource.responses['create'] = {'id': 5}
        self.app.crud('blas', self.resource)
        resp = self.request('POST', '/blas?x=1', json={'name': 'fred'})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json_body, {'id': 5})
        self.assertEqual(
            self.resource.calls, [('create', {'x': '1'}, {'name': 'fred'})])

    def test_no_body(self):
        self.app.crud('blas', self.resource)
        self.assertEqual(self.request('POST', '/blas').status_code, 200)
        self.assertEqual(self.resource.calls, [('create', {}, None)])

    def test_nil_result(self):
        self.resource.responses['create'] = None
        self.app.crud('blas', self.resource)
        resp = self.request('POST', '/blas')
        self.assertEqual(resp.status_code, 204)
        self.assertEqual(resp.body, b'')

    def test_malformed_body(self):
        self.app.crud('blas', self.resource)
        req = Request.blank('/blas', {'REQUEST_METHOD': 'POST'})
        req.body = b'{not json'
        self.assertEqual(req.get_response(self.app).status_code, 400)
        self.assertEqual(self.resource.calls, [])

class TestRead(TestCRUD):

    def test_not_routed_when_absent(self):
        self.resource.read = None
        self.app.crud('blas', self.resource)
        self.assertEqual(self.request('GET', '/blas').status_code, 404)
        self.assertEqual(self.resource.calls, [])

    def test_routed(self):
        self.resource.responses['read'] = [{'name': 'fred'}]
        self.app.crud('blas', self.resource)
        resp = self.request('GET', '/blas')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json_body, [{'name': 'fred'}])

    def test_empty_list(self):
        self.resource.responses['read'] = []
        self.app.crud('blas', self.resource)
        resp = self.request('GET', '/blas')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json_body, [])

    def test_nil_result(self):
        self.resource.responses['read'] = None
        self.app.crud('blas', self.resource)
        self.assertEqual(self.request('GET', '/blas').status_code, 204)

    def test_explicit_outcome(self):
        self.resource.responses['read'] = EMPTY
        self.app.crud('blas', self.resource)
        self.assertEqual(self.request('GET', '/blas').status_code, 204)

class TestReadById(TestCRUD):

    def test_not_routed_when_absent(self):
        self.resource.read_by_id = None
        self.app.crud('blas', self.resource)
        self.assertEqual(self.request('GET', '/blas/5').status_code, 404)
        self.assertEqual(self.resource.calls, [])

    def test_routed(self):
        self.resource.responses['read_by_id'] = {'id': 5}
        self.app.crud('blas', self.resource)
        resp = self.request('GET', '/blas/5?full=1')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json_body, {'id': 5})
        self.assertEqual(
            self.resource.calls, [('read_by_id', '5', {'full': '1'})])

    def test_multiple_ids(self):
        self.resource.responses['read_by_id'] = lambda id, query: {'id': id}
        self.app.crud('blas', self.resource)
        resp = self.request('GET', '/blas/6,7,1')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(
            [c[1] for c in self.resource.calls], ['6', '7', '1'])
        self.assertEqual(
            resp.json_body, [{'id': '6'}, {'id': '7'}, {'id': '1'}])

    def test_multiple_ids_list_results(self):
        self.resource.responses['read_by_id'] = []
        self.app.crud('blas', self.resource)
        resp = self.request('GET', '/blas/5,6')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json_body, [[], []])

    def test_multiple_ids_keep_empty_slots(self):
        self.resource.responses['read_by_id'] = \
            lambda id, query: None if id == '7' else {'id': id}
        self.app.crud('blas', self.resource)
        resp = self.request('GET', '/blas/6,7')
        self.assertEqual(resp.json_body, [{'id': '6'}, None])

    def test_empty_items_not_filtered(self):
        self.app.crud('blas', self.resource)
        self.request('GET', '/blas/5,,6')
        self.assertEqual(
            [c[1] for c in self.resource.calls], ['5', '', '6'])

    def test_nil_result(self):
        self.resource.responses['read_by_id'] = None
        self.app.crud('blas', self.resource)
        self.assertEqual(self.request('GET', '/blas/5').status_code, 204)

class TestUpdate(TestCRUD):

    def test_not_routed_when_absent(self):
        self.resource.update = None
        self.app.crud('blas', self.resource)
        self.assertEqual(self.request('PUT', '/blas/5').status_code, 404)
        self.assertEqual(self.resource.calls, [])

    def test_routed(self):
        self.app.crud('blas', self.resource)
        resp = self.request('PUT', '/blas/5', json={'name': 'fred'})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(
            self.resource.calls, [('update', '5', {}, {'name': 'fred'})])

    def test_nil_result(self):
        self.resource.responses['update'] = None
        self.app.crud('blas', self.resource)
        self.assertEqual(self.request('PUT', '/blas/5').status_code, 204)

    def test_multiple_ids_not_fanned_out(self):
        self.app.crud('blas', self.resource)
        self.request('PUT', '/blas/5,6')
        self.assertEqual(self.resource.calls, [('update', '5,6', {}, None)])

class TestDelete(TestCRUD):

    def test_not_routed_when_absent(self):
        self.resource.delete = None
        self.app.crud('blas', self.resource)
        self.assertEqual(self.request('DELETE', '/blas/5').status_code, 404)
        self.assertEqual(self.resource.calls, [])

    def test_nil_result(self):
        self.app.crud('blas', self.resource)
        self.assertEqual(self.request('DELETE', '/blas/5').status_code, 204)
        self.assertEqual(self.resource.calls, [('delete', '5', {})])

    def test_present_result(self):
        self.resource.responses['delete'] = {}
        self.app.crud('blas', self.resource)
        resp = self.request('DELETE', '/blas/5')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json_body, {})

    def test_multiple_ids(self):
        self.app.crud('blas', self.resource)
        resp = self.request('DELETE', '/blas/5,6')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json_body, [None, None])
        self.assertEqual(
            self.resource.calls, [('delete', '5', {}), ('delete', '6', {})])

class TestErrors(TestCRUD):

    def test_operation_error(self):
        def fail(*args):
            raise ValueError('boom')
        self.resource.responses['read'] = fail
        self.app.crud('blas', self.resource)
        with self.assertLogs('restbind.app', level='ERROR'):
            resp = self.request('GET', '/blas')
        self.assertEqual(resp.status_code, 500)

    def test_http_error(self):
        def conflict(*args):
            raise HTTPConflict()
        self.resource.responses['create'] = conflict
        self.app.crud('blas', self.resource)
        self.assertEqual(self.request('POST', '/blas').status_code, 409)

    def test_custom_error_handler(self):
        errors = []
        def handler(request, error):
            errors.append(error)
            return HTTPGone()
        def fail(*args):
            raise KeyError('5')
        self.app = Application(error_handler=handler)
        crud(self.app)
        self.resource.responses['update'] = fail
        self.app.crud('blas', self.resource)
        self.assertEqual(self.request('PUT', '/blas/5').status_code, 410)
        self.assertEqual(len(errors), 1)
        self.assertIsInstance(errors[0], KeyError)

    def test_fan_out_aborts_on_failure(self):
        def delete(id, query):
            if id == '6':
                raise ValueError(id)
            return {'id': id}
        errors = []
        def handler(request, error):
            errors.append(error)
            return HTTPConflict()
        self.app = Application(error_handler=handler)
        crud(self.app)
        self.resource.responses['delete'] = delete
        self.app.crud('blas', self.resource)
        resp = self.request('DELETE', '/blas/5,6,7')
        self.assertEqual(resp.status_code, 409)
        self.assertEqual([c[1] for c in self.resource.calls], ['5', '6'])
        self.assertEqual(str(errors[0]), '6')

    def test_unserializable_result(self):
        self.resource.responses['read'] = object()
        self.app.crud('blas', self.resource)
        with self.assertLogs('restbind.app', level='ERROR'):
            resp = self.request('GET', '/blas')
        self.assertEqual(resp.status_code, 500)

    def test_unexpected_application_options(self):
        self.assertRaises(TypeError, Application, debug=True)

    def test_application_routes(self):
        def target(request, trace):
            return HTTPGone()
        app = Application(Endpoint(GET, target, 'tea'))
        self.assertEqual(Request.blank('/tea').get_response(app).status_code,
                         410)

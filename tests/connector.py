'''Connector tests shared by all transports.'''
from couchconnector import CouchDBConnector, NotFound, Conflict


DESIGN_DOCS = {
    'books': {
        'language': 'javascript',
        'views': {
            'by_title': {
                'map': 'function (doc) { emit(doc.title, null); }'
            }
        }
    },
    'authors': {
        'views': {
            'by_name': {
                'map': 'function (doc) { emit(doc.name, null); }'
            }
        }
    }
}


class ConnectorTests:
    '''Mixin for :class:`unittest.IsolatedAsyncioTestCase`.

    Subclasses implement the ``settings`` method.
    '''
    def settings(self):
        raise NotImplementedError

    async def asyncSetUp(self):
        self.connector = CouchDBConnector(self.settings())
        self.connector.define('Book', id_name='isbn')
        await self.connector.automigrate()

    async def asyncTearDown(self):
        connection = await self.connector.connect()
        await connection.drop()
        await self.connector.disconnect()

    async def create_books(self, *isbns):
        for isbn in isbns:
            await self.connector.create('Book', {'isbn': isbn,
                                                 'title': 'Book %s' % isbn})

    # CREATE
    async def test_create_with_id(self):
        record = {'isbn': '978-0441013593', 'title': 'Dune', 'pages': 412}
        id, rev = await self.connector.create('Book', record)
        self.assertEqual(id, '978-0441013593')
        self.assertTrue(rev)
        book = await self.connector.find_by_id('Book', id)
        self.assertEqual(book['_id'], id)
        self.assertEqual(book['_rev'], rev)
        self.assertEqual(book['isbn'], id)
        self.assertEqual(book['title'], 'Dune')
        self.assertEqual(book['pages'], 412)
        self.assertNotIn('_id', record)

    async def test_create_without_id(self):
        record = {'title': 'Anonymous'}
        id, rev = await self.connector.create('Book', record)
        self.assertTrue(id)
        self.assertEqual(record, {'title': 'Anonymous'})
        book = await self.connector.find_by_id('Book', id)
        self.assertEqual(book['isbn'], id)
        self.assertEqual(book['title'], 'Anonymous')

    async def test_create_record(self):
        record = {'title': 'Anonymous'}
        result = await self.connector.create_record('Book', record)
        self.assertEqual(record, {'title': 'Anonymous'})
        self.assertTrue(result['isbn'])
        book = await self.connector.find_by_id('Book', result['isbn'])
        self.assertEqual(book['title'], 'Anonymous')

    async def test_create_existing(self):
        await self.create_books('1')
        with self.assertRaises(Conflict):
            await self.connector.create('Book', {'isbn': '1'})

    async def test_default_id_field(self):
        id, _ = await self.connector.create('Author', {'id': 'tolkien',
                                                       'name': 'J.R.R.'})
        self.assertEqual(id, 'tolkien')
        author = await self.connector.find_by_id('Author', id)
        self.assertEqual(author['id'], 'tolkien')

    # SAVE
    async def test_save_new(self):
        await self.connector.save('Book', {'isbn': '2', 'title': 'Emma'})
        book = await self.connector.find_by_id('Book', '2')
        self.assertEqual(book['title'], 'Emma')

    async def test_save_existing(self):
        await self.create_books('3')
        book = await self.connector.find_by_id('Book', '3')
        book['title'] = 'Persuasion'
        await self.connector.save('Book', book)
        book2 = await self.connector.find_by_id('Book', '3')
        self.assertEqual(book2['title'], 'Persuasion')
        self.assertNotEqual(book2['_rev'], book['_rev'])
        # stale revision
        with self.assertRaises(Conflict):
            await self.connector.save('Book', book)

    async def test_save_without_revision(self):
        await self.create_books('4')
        with self.assertRaises(Conflict):
            await self.connector.save('Book', {'isbn': '4', 'title': 'x'})

    # REPLACE
    async def test_replace_by_id(self):
        await self.connector.create('Book', {'isbn': '5', 'title': 'Old',
                                             'year': 1813})
        current = await self.connector.find_by_id('Book', '5')
        book = await self.connector.replace_by_id('Book', '5',
                                                  {'title': 'New'})
        self.assertEqual(book['title'], 'New')
        self.assertEqual(book['isbn'], '5')
        self.assertEqual(book['_id'], '5')
        self.assertNotIn('year', book)
        self.assertNotEqual(book['_rev'], current['_rev'])

    async def test_replace_by_id_ignores_record_revision(self):
        await self.create_books('6')
        book = await self.connector.find_by_id('Book', '6')
        await self.connector.replace_by_id('Book', '6', {'title': 'A'})
        book['title'] = 'B'
        book = await self.connector.replace_by_id('Book', '6', book)
        self.assertEqual(book['title'], 'B')

    async def test_replace_by_id_not_found(self):
        with self.assertRaises(NotFound):
            await self.connector.replace_by_id('Book', 'missing',
                                               {'title': 'x'})
        with self.assertRaises(NotFound):
            await self.connector.find_by_id('Book', 'missing')
        info = await self.connector.get_db()
        self.assertEqual(info['doc_count'], len(self.design_docs()))

    # DESTROY
    async def test_destroy(self):
        await self.create_books('7')
        result = await self.connector.destroy('Book', '7')
        self.assertEqual(result, {'count': 1})
        result = await self.connector.destroy('Book', '7')
        self.assertEqual(result, {'count': 0})
        with self.assertRaises(NotFound):
            await self.connector.find_by_id('Book', '7')

    async def test_destroy_by_id(self):
        await self.create_books('8')
        result = await self.connector.destroy_by_id('Book', '8')
        self.assertTrue(result['ok'])
        with self.assertRaises(NotFound):
            await self.connector.destroy_by_id('Book', '8')

    async def test_create_after_destroy(self):
        await self.create_books('9')
        await self.connector.destroy('Book', '9')
        await self.create_books('9')
        book = await self.connector.find_by_id('Book', '9')
        self.assertEqual(book['title'], 'Book 9')

    # ALL
    async def test_all_inq(self):
        await self.create_books('a', 'b', 'c')
        books = await self.connector.all(
            'Book', {'where': {'isbn': {'inq': ['b', 'missing', 'a']}}})
        self.assertEqual([b['isbn'] for b in books], ['b', 'a'])
        self.assertEqual(books[0]['title'], 'Book b')

    async def test_all_duplicates(self):
        await self.create_books('a')
        books = await self.connector.all(
            'Book', {'where': {'isbn': {'inq': ['a', 'a']}}})
        self.assertEqual([b['isbn'] for b in books], ['a', 'a'])

    async def test_all_equality(self):
        await self.create_books('a', 'b')
        books = await self.connector.all('Book', {'where': {'isbn': 'b'}})
        self.assertEqual(len(books), 1)
        self.assertEqual(books[0]['isbn'], 'b')

    async def test_all_unsupported(self):
        await self.create_books('a', 'b')
        self.assertEqual(await self.connector.all('Book', {}), [])
        self.assertEqual(await self.connector.all('Book', None), [])
        self.assertEqual(await self.connector.all(
            'Book', {'where': {'title': 'Book a'}}), [])
        self.assertEqual(await self.connector.all(
            'Book', {'where': {'isbn': {'gt': 'a'}}}), [])

    # DESTROY ALL
    async def test_destroy_all(self):
        await self.create_books('a', 'b', 'c')
        result = await self.connector.destroy_all(
            'Book', {'isbn': {'inq': ['a', 'missing', 'c']}})
        self.assertEqual(result, {'count': 2})
        books = await self.connector.all(
            'Book', {'where': {'isbn': {'inq': ['a', 'b', 'c']}}})
        self.assertEqual([b['isbn'] for b in books], ['b'])

    async def test_destroy_all_unsupported(self):
        await self.create_books('a')
        result = await self.connector.destroy_all('Book', {'title': 'x'})
        self.assertEqual(result, {'count': 0})
        result = await self.connector.destroy_all('Book', None)
        self.assertEqual(result, {'count': 0})
        book = await self.connector.find_by_id('Book', 'a')
        self.assertEqual(book['isbn'], 'a')

    # NOT IMPLEMENTED
    async def test_not_implemented(self):
        with self.assertRaises(NotImplementedError):
            await self.connector.count('Book', {})
        with self.assertRaises(NotImplementedError):
            await self.connector.update_attributes('Book', 'a', {})
        with self.assertRaises(NotImplementedError):
            await self.connector.update('Book', {}, {})

    # DATABASE
    async def test_get_db(self):
        info = await self.connector.get_db()
        self.assertEqual(info['db_name'], self.connector.database)

    async def test_db_url(self):
        url = await self.connector.db_url()
        self.assertTrue(url.endswith('/%s' % self.connector.database))

    async def test_automigrate(self):
        await self.create_books('a')
        info = await self.connector.automigrate()
        self.assertEqual(info['db_name'], self.connector.database)
        with self.assertRaises(NotFound):
            await self.connector.find_by_id('Book', 'a')
        design = await self.get_design('books')
        self.assertEqual(design['views'], DESIGN_DOCS['books']['views'])

    async def test_autoupdate(self):
        await self.create_books('a')
        await self.connector.autoupdate()
        book = await self.connector.find_by_id('Book', 'a')
        self.assertEqual(book['isbn'], 'a')
        connection = await self.connector.connect()
        await connection.drop()
        self.assertEqual(await self.connector.get_db(), None)
        info = await self.connector.autoupdate()
        self.assertEqual(info['db_name'], self.connector.database)
        self.assertEqual(await self.connector.all(
            'Book', {'where': {'isbn': 'a'}}), [])

    # DESIGN DOCUMENTS
    async def test_design_docs_created(self):
        for name, definition in DESIGN_DOCS.items():
            design = await self.get_design(name)
            self.assertEqual(design['_id'], '_design/%s' % name)
            self.assertEqual(design['views'], definition['views'])

    async def test_design_docs_idempotent(self):
        before = await self.get_design('books')
        replies = await self.connector.save_design_docs()
        self.assertEqual(set(replies), set(DESIGN_DOCS))
        after = await self.get_design('books')
        self.assertNotEqual(after['_rev'], before['_rev'])
        after.pop('_rev')
        before.pop('_rev')
        self.assertEqual(after, before)

    async def test_design_docs_preserve_other_fields(self):
        connection = await self.connector.connect()
        design = await self.get_design('books')
        design['options'] = {'local_seq': True}
        await connection.insert(design)
        await self.connector.save_design_docs()
        await self.connector.save_design_docs()
        design = await self.get_design('books')
        self.assertEqual(design['options'], {'local_seq': True})
        self.assertEqual(design['views'], DESIGN_DOCS['books']['views'])

    def design_docs(self):
        return DESIGN_DOCS

    async def get_design(self, name):
        connection = await self.connector.connect()
        return await connection.get('_design/%s' % name)

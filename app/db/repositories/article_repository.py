import re
from typing import Optional, List, Sequence, Union
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete

from app.db.models.node import Node as NodeModel
from app.domains.articles.entities import Article, ARTICLE_TYPE, PUBLISHED

# Верхняя граница колонки Integer (int4 в PostgreSQL)
MAX_NODE_ID = 2 ** 31 - 1

_NODE_ID_RE = re.compile(r"[0-9]+")


def parse_node_id(value: Union[int, str, None]) -> Optional[int]:
    """id узла или None, если значение не помещается в колонку"""
    if isinstance(value, str):
        if not _NODE_ID_RE.fullmatch(value):
            return None
        value = int(value)
    if not isinstance(value, int) or isinstance(value, bool):
        return None
    if value < 1 or value > MAX_NODE_ID:
        return None
    return value


class ArticleRepository:
    """Репозиторий узлов контента, отдающий их как статьи"""
    
    def __init__(self, session: AsyncSession):
        self.session = session
    
    async def load(self, node_id: Union[int, str]) -> Optional[Article]:
        """Загрузка узла по id (любого типа, тип проверяет вызывающий код)"""
        node_id = parse_node_id(node_id)
        if node_id is None:
            return None
        
        result = await self.session.execute(
            select(NodeModel)
            .where(NodeModel.id == node_id)
            .execution_options(populate_existing=True)
        )
        db_node = result.scalar_one_or_none()
        return self._to_domain(db_node) if db_node else None
    
    async def load_multiple(self, node_ids: Sequence[int]) -> List[Article]:
        """Загрузка нескольких узлов с сохранением порядка id"""
        if not node_ids:
            return []
        
        result = await self.session.execute(
            select(NodeModel).where(NodeModel.id.in_(node_ids))
        )
        by_id = {node.id: node for node in result.scalars().all()}
        return [self._to_domain(by_id[node_id]) for node_id in node_ids if node_id in by_id]
    
    async def query(self, node_type: str = ARTICLE_TYPE, published_only: bool = False) -> List[int]:
        """Получение id узлов заданного типа"""
        stmt = select(NodeModel.id).where(NodeModel.type == node_type)
        
        if published_only:
            stmt = stmt.where(NodeModel.status == PUBLISHED)
        
        result = await self.session.execute(stmt.order_by(NodeModel.id))
        return list(result.scalars().all())
    
    async def save(self, article: Article) -> Optional[Article]:
        """Создание или обновление узла; None, если узел уже удален"""
        if article.id is None:
            return await self._create(article)
        
        stmt = (
            update(NodeModel)
            .where(NodeModel.id == article.id)
            .values(
                title=article.title,
                body_value=article.body,
                body_format=article.body_format,
                status=article.status,
                updated_at=article.updated_at
            )
        )
        
        await self.session.execute(stmt)
        await self.session.commit()
        
        return await self.load(article.id)
    
    async def delete(self, article: Article) -> bool:
        """Удаление узла"""
        stmt = delete(NodeModel).where(NodeModel.id == article.id)
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount > 0
    
    async def _create(self, article: Article) -> Article:
        db_node = NodeModel(
            type=article.type,
            title=article.title,
            body_value=article.body,
            body_format=article.body_format,
            status=article.status,
            owner_id=article.owner_id
        )
        
        self.session.add(db_node)
        await self.session.commit()
        await self.session.refresh(db_node)
        return self._to_domain(db_node)
    
    def _to_domain(self, db_node: NodeModel) -> Article:
        """Преобразование модели БД в доменную сущность"""
        return Article(
            id=db_node.id,
            title=db_node.title,
            body=db_node.body_value,
            body_format=db_node.body_format,
            status=db_node.status,
            type=db_node.type,
            owner_id=db_node.owner_id,
            created_at=db_node.created_at,
            updated_at=db_node.updated_at
        )
